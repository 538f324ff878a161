"""Pydantic models for authenticated identities."""

from pydantic import BaseModel, Field, ConfigDict


class Principal(BaseModel):
    """Identity returned by a credential verifier.

    Attributes:
        subject: Identifier of the authenticated caller.
        scheme: Verifier that accepted the credential (e.g. ``static``, ``jwt``).
        claims: Extra claims carried by the credential, if any.
    """

    subject: str = Field(..., description="Authenticated caller identifier")
    scheme: str = Field(..., description="Verification scheme")
    claims: dict = Field(default_factory=dict, description="Credential claims")

    model_config = ConfigDict(frozen=True)

"""User guide server - validated single-document download service."""

__version__ = "0.1.0"

# Test configuration
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).parent.parent

# Add repo root to path so tests can import modules
sys.path.insert(0, str(REPO_ROOT))

from guide_server.config import GuideConfig, Settings  # noqa: E402


@pytest.fixture
def guide_dir(tmp_path) -> Path:
    """Base directory holding a small user guide PDF."""
    base = tmp_path / "userguides"
    base.mkdir()
    (base / "user-guide.pdf").write_bytes(b"%PDF-1.4 user guide")
    return base


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    static_dir = tmp_path / "static"
    static_dir.mkdir()
    (static_dir / "user-guide.pdf").write_bytes(b"%PDF-1.4 public guide")
    (static_dir / "logo.txt").write_text("logo", encoding="utf-8")
    return Settings(
        PROPERTIES_FILE=str(tmp_path / "missing.properties"),
        STATIC_DIR=str(static_dir),
        PUBLIC_GUIDE_FILE=str(static_dir / "user-guide.pdf"),
        AUTH_MODE="static",
        AUTH_STATIC_TOKEN="valid-oauth-token",
    )


@pytest.fixture
def guide_config(guide_dir) -> GuideConfig:
    return GuideConfig(userguide_path=guide_dir, userguide_filename="user-guide.pdf")

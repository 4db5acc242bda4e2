# ABOUTME: Shared pytest fixtures for tunetag tests.
# ABOUTME: Provides provider settings snapshots, a settings file path, and sample cover images.

from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image

from tunetag.config import ProviderSettings


@pytest.fixture
def all_enabled_settings() -> ProviderSettings:
    """Settings with every provider enabled and credentialed."""
    return ProviderSettings(
        spotify_id="spotify-id",
        spotify_secret="spotify-secret",
        genius_token="genius-token",
        lastfm_api_key="lastfm-key",
        enable_apple_music=True,
        enable_spotify=True,
        enable_genius=True,
        enable_lastfm=True,
    )


@pytest.fixture
def all_disabled_settings() -> ProviderSettings:
    """Settings with every provider switched off."""
    return ProviderSettings(
        enable_apple_music=False,
        enable_spotify=False,
        enable_genius=False,
        enable_lastfm=False,
    )


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    """Path for a settings file inside a not-yet-created directory."""
    return tmp_path / "config" / "settings.json"


@pytest.fixture
def cover_jpeg() -> bytes:
    """A small non-square JPEG cover image."""
    image = Image.new("RGB", (120, 80), color=(200, 30, 30))
    out = BytesIO()
    image.save(out, format="JPEG")
    return out.getvalue()


@pytest.fixture
def cover_png() -> bytes:
    """A square PNG cover image with transparency."""
    image = Image.new("RGBA", (64, 64), color=(10, 20, 200, 128))
    out = BytesIO()
    image.save(out, format="PNG")
    return out.getvalue()

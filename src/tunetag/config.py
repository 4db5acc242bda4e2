# ABOUTME: Provider settings for tunetag: enable flags, credentials, and eligibility rules.
# ABOUTME: Loads and saves the settings snapshot as a JSON file under ~/.tunetag.

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from tunetag.metadata.types import Source

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path.home() / ".tunetag" / "settings.json"

# Fields holding secrets; masked when displayed.
SECRET_FIELDS = frozenset({"spotify_secret", "genius_token", "lastfm_api_key"})


@dataclass
class ProviderSettings:
    """Per-provider enable flags and credentials.

    Owned by the caller; the aggregator reads a snapshot once per search.
    Apple Music is on by default since it needs no credentials.
    """

    spotify_id: str = ""
    spotify_secret: str = ""
    genius_token: str = ""
    lastfm_api_key: str = ""
    enable_apple_music: bool = True
    enable_spotify: bool = False
    enable_genius: bool = False
    enable_lastfm: bool = False

    def is_enabled(self, source: Source) -> bool:
        """Whether the user switched the provider on."""
        return {
            Source.APPLE_MUSIC: self.enable_apple_music,
            Source.SPOTIFY: self.enable_spotify,
            Source.GENIUS: self.enable_genius,
            Source.LASTFM: self.enable_lastfm,
        }[source]

    def has_credentials(self, source: Source) -> bool:
        """Whether every credential the provider needs is non-empty."""
        return {
            Source.APPLE_MUSIC: True,
            Source.SPOTIFY: bool(self.spotify_id and self.spotify_secret),
            Source.GENIUS: bool(self.genius_token),
            Source.LASTFM: bool(self.lastfm_api_key),
        }[source]

    def is_eligible(self, source: Source) -> bool:
        """A provider is eligible when it is enabled and fully credentialed."""
        return self.is_enabled(source) and self.has_credentials(source)


def _coerce(name: str, value: object, default: object) -> object:
    """Return value if it matches the field's type, else the default."""
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
    elif isinstance(value, str):
        return value
    logger.warning("Ignoring setting %s: unexpected value %r", name, value)
    return default


def settings_from_dict(data: dict[str, object]) -> ProviderSettings:
    """Build ProviderSettings from a decoded JSON object.

    Unknown keys are ignored; values of the wrong type fall back to defaults.
    """
    defaults = ProviderSettings()
    kwargs: dict[str, object] = {}
    for f in fields(ProviderSettings):
        if f.name in data:
            kwargs[f.name] = _coerce(f.name, data[f.name], getattr(defaults, f.name))
    return ProviderSettings(**kwargs)  # type: ignore[arg-type]


def load_settings(path: Path | None = None) -> ProviderSettings:
    """Load settings from disk, returning defaults if the file is absent or unreadable."""
    settings_path = path or DEFAULT_SETTINGS_PATH
    if not settings_path.exists():
        return ProviderSettings()

    try:
        data = json.loads(settings_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Could not read settings from %s: %s", settings_path, exc)
        return ProviderSettings()

    if not isinstance(data, dict):
        logger.warning("Settings file %s does not hold a JSON object", settings_path)
        return ProviderSettings()
    return settings_from_dict(data)


def save_settings(settings: ProviderSettings, path: Path | None = None) -> Path:
    """Write settings as pretty-printed JSON, creating the parent directory."""
    settings_path = path or DEFAULT_SETTINGS_PATH
    settings_path.parent.mkdir(parents=True, exist_ok=True)
    settings_path.write_text(json.dumps(asdict(settings), indent=2) + "\n", encoding="utf-8")
    return settings_path

# ABOUTME: Core metadata data structures for music search results.
# ABOUTME: MetadataResult is the canonical record every provider normalizes into.

from dataclasses import dataclass
from enum import Enum


class Source(str, Enum):
    """Provenance tag identifying which provider produced a result."""

    APPLE_MUSIC = "Apple Music"
    SPOTIFY = "Spotify"
    GENIUS = "Genius"
    LASTFM = "Last.fm"

    @property
    def display(self) -> str:
        return self.value


# Fixed concatenation order for aggregated results.
SOURCE_ORDER: tuple[Source, ...] = (
    Source.APPLE_MUSIC,
    Source.SPOTIFY,
    Source.GENIUS,
    Source.LASTFM,
)


@dataclass(frozen=True)
class MetadataResult:
    """A single track match returned by an online metadata provider.

    Text fields are never None: providers that omit a field get an empty
    string. cover_url, when present, already points at the largest artwork
    the provider advertises.
    """

    title: str
    artist: str
    album: str
    source: Source
    cover_url: str | None = None

    @property
    def has_cover(self) -> bool:
        """Whether the result carries an artwork URL."""
        return bool(self.cover_url)

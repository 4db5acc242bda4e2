# ABOUTME: Parsing functions for music provider API JSON responses.
# ABOUTME: Converts iTunes, Spotify, Genius, and Last.fm payloads into MetadataResult records.

from typing import Any

from tunetag.metadata.http import ParseError
from tunetag.metadata.types import MetadataResult, Source

GENIUS_ALBUM_PLACEHOLDER = "Unknown (Genius)"
LASTFM_ALBUM_PLACEHOLDER = "Unknown (Last.fm)"

_ITUNES_ARTWORK_SIZE = "100x100"
_ITUNES_ARTWORK_UPGRADE = "600x600"

# Last.fm image size tags, most preferred first.
_LASTFM_IMAGE_PREFERENCE = ("extralarge", "large")


def _field(data: Any, key: str, expected: type, context: str) -> Any:
    """Fetch a required container field, raising ParseError on a shape mismatch."""
    if not isinstance(data, dict):
        raise ParseError(f"{context}: expected an object, got {type(data).__name__}")
    value = data.get(key)
    if not isinstance(value, expected):
        raise ParseError(f"{context}: missing or malformed '{key}'")
    return value


def _string(value: Any, context: str) -> str:
    """Read an optional text field; None becomes an empty string.

    Raises:
        ParseError: If the value is present but not a string.
    """
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ParseError(f"{context}: expected a string, got {type(value).__name__}")
    return value


def _objects(items: list[Any], context: str) -> list[dict[str, Any]]:
    for item in items:
        if not isinstance(item, dict):
            raise ParseError(f"{context}: expected objects in list, got {type(item).__name__}")
    return items


def upgrade_itunes_artwork(url: str) -> str:
    """Swap the 100x100 size token in an iTunes artwork URL for 600x600.

    Plain string substitution; URLs without the token pass through unchanged.
    """
    return url.replace(_ITUNES_ARTWORK_SIZE, _ITUNES_ARTWORK_UPGRADE)


def parse_itunes_response(data: Any) -> list[MetadataResult]:
    """Parse an iTunes Search API response into MetadataResult records."""
    tracks = _objects(_field(data, "results", list, "iTunes response"), "iTunes results")

    results: list[MetadataResult] = []
    for track in tracks:
        artwork = _string(track.get("artworkUrl100"), "iTunes artworkUrl100")
        results.append(
            MetadataResult(
                title=_string(track.get("trackName"), "iTunes trackName"),
                artist=_string(track.get("artistName"), "iTunes artistName"),
                album=_string(track.get("collectionName"), "iTunes collectionName"),
                cover_url=upgrade_itunes_artwork(artwork) if artwork else None,
                source=Source.APPLE_MUSIC,
            )
        )
    return results


def parse_spotify_token(data: Any) -> str:
    """Extract the bearer token from a Spotify client-credentials response."""
    token = _field(data, "access_token", str, "Spotify token response")
    if not token:
        raise ParseError("Spotify token response: empty 'access_token'")
    return token


def parse_spotify_response(data: Any) -> list[MetadataResult]:
    """Parse a Spotify track search response into MetadataResult records.

    The first listed artist wins; the first album image wins regardless of
    its advertised resolution.
    """
    tracks = _field(data, "tracks", dict, "Spotify response")
    items = _objects(_field(tracks, "items", list, "Spotify tracks"), "Spotify items")

    results: list[MetadataResult] = []
    for item in items:
        album = item.get("album") or {}
        if not isinstance(album, dict):
            raise ParseError("Spotify item: malformed 'album'")
        artists = _objects(item.get("artists") or [], "Spotify artists")
        images = _objects(album.get("images") or [], "Spotify album images")
        artist = _string(artists[0].get("name"), "Spotify artist name") if artists else ""
        cover = _string(images[0].get("url"), "Spotify image url") if images else ""

        results.append(
            MetadataResult(
                title=_string(item.get("name"), "Spotify track name"),
                artist=artist,
                album=_string(album.get("name"), "Spotify album name"),
                cover_url=cover or None,
                source=Source.SPOTIFY,
            )
        )
    return results


def parse_genius_response(data: Any) -> list[MetadataResult]:
    """Parse a Genius search response into MetadataResult records.

    Genius has no album concept in search hits, so album is a fixed placeholder.
    """
    body = _field(data, "response", dict, "Genius response")
    hits = _objects(_field(body, "hits", list, "Genius response body"), "Genius hits")

    results: list[MetadataResult] = []
    for hit in hits:
        song = _field(hit, "result", dict, "Genius hit")
        cover = _string(song.get("song_art_image_url"), "Genius song_art_image_url")
        results.append(
            MetadataResult(
                title=_string(song.get("title"), "Genius title"),
                artist=_string(song.get("artist_names"), "Genius artist_names"),
                album=GENIUS_ALBUM_PLACEHOLDER,
                cover_url=cover or None,
                source=Source.GENIUS,
            )
        )
    return results


def select_lastfm_image(images: list[dict[str, Any]]) -> str | None:
    """Pick the cover URL from a Last.fm image list.

    Looks at the first 'extralarge' entry, then the first 'large' one, and
    returns whichever has a non-empty URL first. Matching is by size tag only.
    """
    for size in _LASTFM_IMAGE_PREFERENCE:
        image = next((i for i in images if i.get("size") == size), None)
        if image is None:
            continue
        url = _string(image.get("#text"), f"Last.fm {size} image")
        if url:
            return url
    return None


def parse_lastfm_response(data: Any) -> list[MetadataResult]:
    """Parse a Last.fm track.search response into MetadataResult records."""
    matches = _field(
        _field(data, "results", dict, "Last.fm response"),
        "trackmatches",
        dict,
        "Last.fm results",
    )
    tracks = matches.get("track", [])
    # Last.fm collapses a single match into a bare object.
    if isinstance(tracks, dict):
        tracks = [tracks]
    if not isinstance(tracks, list):
        raise ParseError("Last.fm trackmatches: malformed 'track'")

    results: list[MetadataResult] = []
    for track in _objects(tracks, "Last.fm tracks"):
        images = _objects(track.get("image") or [], "Last.fm images")
        results.append(
            MetadataResult(
                title=_string(track.get("name"), "Last.fm track name"),
                artist=_string(track.get("artist"), "Last.fm artist"),
                album=LASTFM_ALBUM_PLACEHOLDER,
                cover_url=select_lastfm_image(images),
                source=Source.LASTFM,
            )
        )
    return results

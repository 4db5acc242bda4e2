# ABOUTME: MetadataProvider protocol defining the contract for music metadata sources.
# ABOUTME: Apple Music, Spotify, Genius, and Last.fm clients all implement this.

from typing import Protocol, runtime_checkable

from tunetag.metadata.types import MetadataResult, Source


@runtime_checkable
class MetadataProvider(Protocol):
    """Protocol for online music metadata lookup services.

    search() returns results in the provider's own order and raises a
    ProviderError subclass on failure.
    """

    @property
    def name(self) -> Source: ...

    async def search(self, term: str) -> list[MetadataResult]: ...

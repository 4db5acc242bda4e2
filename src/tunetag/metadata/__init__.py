# ABOUTME: Metadata package for online music metadata lookup and normalization.
# ABOUTME: Exports the canonical MetadataResult record, provider protocol, and error types.

from tunetag.metadata.http import (
    AuthError,
    ConfigError,
    ParseError,
    ProviderError,
    RequestError,
    TransportError,
)
from tunetag.metadata.provider import MetadataProvider
from tunetag.metadata.types import MetadataResult, Source

__all__ = [
    "AuthError",
    "ConfigError",
    "MetadataProvider",
    "MetadataResult",
    "ParseError",
    "ProviderError",
    "RequestError",
    "Source",
    "TransportError",
]

"""Exception taxonomy shared by builders, loaders, and the CLI.

Only listing failures abort an operation outright. Content-parse problems
during a scan are logged, lookup misses return ``None``, and malformed
persisted state is replaced field by field.
"""

from __future__ import annotations


class PaukerError(Exception):
    """Base class for errors surfaced to the CLI."""


class SourceListingError(PaukerError):
    """A directory or remote listing could not be read."""


class ContentLoadError(PaukerError):
    """Payload for an activated node could not be read or fetched."""


class PayloadError(PaukerError):
    """Payload header is missing its game-type discriminator or mismatches."""


__all__ = [
    "PaukerError",
    "SourceListingError",
    "ContentLoadError",
    "PayloadError",
]

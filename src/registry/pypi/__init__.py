"""PyPI JSON API access."""

from .client import PackageNotFoundError, RegistryError, fetch_index_metadata, parse_index_metadata

__all__ = [
    "PackageNotFoundError",
    "RegistryError",
    "fetch_index_metadata",
    "parse_index_metadata",
]

"""PyPI JSON API client: fetch a package's release listing."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Tuple

from constants import Constants
from common.http_client import get_json
from common.logging_utils import extra_context, is_debug_enabled, Timer, safe_url
from resolution.models import IndexMetadata, ReleaseDescriptor
from resolution.request import normalize_name

logger = logging.getLogger(__name__)

HEADERS_JSON = {"Accept": "application/json"}


class RegistryError(Exception):
    """The index answered, but not with usable metadata."""


class PackageNotFoundError(RegistryError):
    """The index has no such project."""

    def __init__(self, package: str):
        self.package = package
        super().__init__(f"Package {package} not found on the index")


def index_url_for(package: str, url: str = Constants.REGISTRY_URL_PYPI) -> str:
    """Build ``<index>/<normalized-name>/json``."""
    return url.rstrip("/") + "/" + normalize_name(package) + "/json"


def _parse_release(entry: Mapping[str, Any]) -> ReleaseDescriptor:
    digests = entry.get("digests") or {}
    try:
        size = int(entry.get("size") or 0)
    except (TypeError, ValueError):
        size = 0
    return ReleaseDescriptor(
        filename=str(entry["filename"]),
        python_version=str(entry.get("python_version") or ""),
        url=str(entry["url"]),
        size=max(size, 0),
        requires_python=entry.get("requires_python") or None,
        sha256=digests.get("sha256") if isinstance(digests, dict) else None,
    )


def parse_index_metadata(document: Mapping[str, Any], package: str = "") -> IndexMetadata:
    """Deserialize a PyPI JSON document into IndexMetadata.

    Entries missing ``filename`` or ``url`` are dropped; per-version file
    order is preserved.

    Raises:
        RegistryError: the document lacks the ``info``/``releases`` shape.
    """
    if not isinstance(document, Mapping):
        raise RegistryError("Index response is not a JSON object")
    info = document.get("info")
    raw_releases = document.get("releases")
    if not isinstance(info, Mapping) or not isinstance(raw_releases, Mapping):
        raise RegistryError(f"Index response for {package or 'package'} lacks info/releases")

    releases: Dict[str, Tuple[ReleaseDescriptor, ...]] = {}
    for version, entries in raw_releases.items():
        parsed: List[ReleaseDescriptor] = []
        for entry in entries or []:
            if not isinstance(entry, Mapping) or not entry.get("filename") or not entry.get("url"):
                logger.debug("Dropping malformed release entry under %s", version)
                continue
            parsed.append(_parse_release(entry))
        releases[str(version)] = tuple(parsed)

    name = str(info.get("name") or package)
    return IndexMetadata(name=name, releases=releases)


def fetch_index_metadata(package: str, url: str = Constants.REGISTRY_URL_PYPI) -> IndexMetadata:
    """Fetch and deserialize the index entry for ``package``.

    Raises:
        PackageNotFoundError: HTTP 404.
        RegistryError: any other failure to obtain usable metadata.
    """
    fullurl = index_url_for(package, url)
    logger.info("Fetching index metadata for %s", package)

    with Timer() as timer:
        status_code, _, document = get_json(fullurl, headers=HEADERS_JSON)

    if status_code == 404:
        logger.warning(
            "Package not found on index",
            extra=extra_context(
                event="http_response",
                outcome="not_found",
                status_code=404,
                target=safe_url(fullurl),
            ),
        )
        raise PackageNotFoundError(package)
    if status_code != 200:
        raise RegistryError(f"Index request for {package} failed (status {status_code})")
    if document is None:
        raise RegistryError(f"Couldn't decode index JSON for {package}")

    metadata = parse_index_metadata(document, package)
    if is_debug_enabled(logger):
        logger.debug(
            "Index metadata parsed",
            extra=extra_context(
                event="parse",
                component="client",
                outcome="success",
                duration_ms=timer.duration_ms(),
                version_count=len(metadata.releases),
                package=metadata.name,
            ),
        )
    return metadata

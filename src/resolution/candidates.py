"""Candidate version selection over an index snapshot."""

import logging
import re
from typing import List, Optional, Tuple, Union

from packaging import version

from .errors import InvalidRequestError, NoMatchError
from .models import IndexMetadata

logger = logging.getLogger(__name__)

_REQUESTED_VERSION = re.compile(r"^[^\s-]+$")

SortKey = Tuple[int, Union[version.Version, str], str]


def version_sort_key(value: str) -> SortKey:
    """Order key for index version strings.

    Parsable versions compare structurally; anything else falls back to
    plain string order and sorts below every parsable version.
    """
    try:
        return (1, version.Version(value), value)
    except version.InvalidVersion:
        return (0, value, value)


def sort_versions_descending(versions) -> List[str]:
    return sorted(versions, key=version_sort_key, reverse=True)


def validate_requested_version(requested_version: Optional[str]) -> Optional[str]:
    """Reject requested versions that can never name an index key."""
    if requested_version is None:
        return None
    if not _REQUESTED_VERSION.match(requested_version):
        raise InvalidRequestError(f"Invalid requested version: {requested_version!r}")
    return requested_version


def select_candidates(index: IndexMetadata, requested_version: Optional[str] = None) -> List[str]:
    """Return the versions worth trying, newest first.

    An exact key match short-circuits to that single version. Otherwise the
    request is treated as a prefix family: ``2.1`` selects ``2.1.0``,
    ``2.1.3`` and so on, but not ``2.10``.

    Raises:
        InvalidRequestError: ``requested_version`` is malformed.
        NoMatchError: nothing in the index matches ``requested_version``.
    """
    requested_version = validate_requested_version(requested_version)
    ordered = sort_versions_descending(index.versions())

    if requested_version is None:
        return ordered
    if requested_version in index.releases:
        return [requested_version]

    prefix = requested_version + "."
    family = [v for v in ordered if v.startswith(prefix)]
    if not family:
        raise NoMatchError(index.name, requested_version)
    logger.debug("Version %s expanded to %d candidates", requested_version, len(family))
    return family

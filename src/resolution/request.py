"""Token parsing utilities for install requests."""

import logging
import re
from typing import List, Optional, Tuple

import requirements

from .errors import InvalidRequestError
from .models import PackageRequest

logger = logging.getLogger(__name__)

_PIN = "=="
_NAME_SEPARATORS = re.compile(r"[-_.]+")
_NON_PIN_MARKERS = ("=", "!", ">", "<", "~", "@", ";")


def normalize_name(name: str) -> str:
    """PEP 503 normalization used for index lookups and installed matching."""
    return _NAME_SEPARATORS.sub("-", name.strip()).lower()


def tokenize_rightmost_pin(s: str) -> Tuple[str, Optional[str]]:
    """Return (name, version or None) split on the rightmost ``==``."""
    s = s.strip()
    if _PIN not in s:
        return s, None
    name, spec = s.rsplit(_PIN, 1)
    spec = spec.strip()
    return name.strip(), spec if spec else None


def parse_install_token(token: str) -> PackageRequest:
    """Parse a CLI ``name[==version]`` token into a PackageRequest.

    Raises:
        InvalidRequestError: empty name, dangling ``==``, or an operator other
            than an exact pin.
    """
    name, requested = tokenize_rightmost_pin(token)
    if not name:
        raise InvalidRequestError(f"Missing package name in {token!r}")
    if any(op in name for op in _NON_PIN_MARKERS) or (requested and _PIN in requested):
        raise InvalidRequestError(
            f"Only 'name' or 'name==version' requests are supported, got {token!r}"
        )
    if _PIN in token and requested is None:
        raise InvalidRequestError(f"Missing version after '==' in {token!r}")
    return PackageRequest(name=name, requested_version=requested, raw_token=token)


def load_requirements_file(path: str) -> List[PackageRequest]:
    """Read pinned or bare requirements from a requirements file.

    Raises:
        InvalidRequestError: a line uses anything but an exact pin.
        OSError: the file cannot be read.
    """
    with open(path, encoding="utf-8") as handle:
        body = handle.read()

    found: List[PackageRequest] = []
    for req in requirements.parse(body):
        if not req.name:
            logger.warning("Skipping unnamed requirement %r in %s", req.line, path)
            continue
        specs = list(req.specs or [])
        if not specs:
            found.append(PackageRequest(name=req.name, requested_version=None, raw_token=req.line))
            continue
        if len(specs) != 1 or specs[0][0] != _PIN:
            raise InvalidRequestError(
                f"Only exact '==' pins are supported in {path}: {req.line!r}"
            )
        found.append(PackageRequest(name=req.name, requested_version=specs[0][1], raw_token=req.line))
    return found

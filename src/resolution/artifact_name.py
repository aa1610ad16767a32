"""Wheel filename parsing.

Grammar (PEP 427 without the legacy variants):

    {distribution}-{version}(-{build})?-{python}-{abi}-{platform}.whl

Every segment is a non-empty run of non-hyphen characters; the optional
build segment is all digits.
"""

import re

from constants import Constants

from .errors import ArtifactNameError
from .models import ArtifactInfo

_WHEEL_PATTERN = re.compile(
    r"^(?P<distribution>[^-]+)"
    r"-(?P<version>[^-]+)"
    r"(?:-(?P<build>[0-9]+))?"
    r"-(?P<python_tag>[^-]+)"
    r"-(?P<abi_tag>[^-]+)"
    r"-(?P<platform_tag>[^-]+)"
    + re.escape(Constants.WHEEL_EXTENSION)
    + r"$"
)


def is_wheel_filename(filename: str) -> bool:
    """Return True when the name carries the binary archive extension."""
    return filename.endswith(Constants.WHEEL_EXTENSION)


def parse_artifact_name(filename: str) -> ArtifactInfo:
    """Split a wheel filename into its segments.

    Raises:
        ArtifactNameError: filename does not follow the wheel grammar.
    """
    match = _WHEEL_PATTERN.match(filename or "")
    if not match:
        raise ArtifactNameError(f"Not a wheel filename: {filename!r}")
    return ArtifactInfo(
        distribution=match.group("distribution"),
        version=match.group("version"),
        build=match.group("build"),
        python_tag=match.group("python_tag"),
        abi_tag=match.group("abi_tag"),
        platform_tag=match.group("platform_tag"),
        extension=Constants.WHEEL_EXTENSION,
    )

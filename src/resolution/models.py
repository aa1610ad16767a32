"""Data models for artifact resolution."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Tuple


class Operator(Enum):
    """Comparison operators accepted in a runtime requirement."""
    EQ = "=="
    GE = ">="
    LE = "<="
    GT = ">"
    LT = "<"


@dataclass(frozen=True)
class ReleaseDescriptor:
    """One published file for one version, as listed by the index."""
    filename: str
    python_version: str  # compact tag ("cp310", "py3") or "source"
    url: str
    size: int = 0
    requires_python: Optional[str] = None
    sha256: Optional[str] = None


@dataclass(frozen=True)
class IndexMetadata:
    """Snapshot of one package's index entry."""
    name: str
    releases: Mapping[str, Tuple[ReleaseDescriptor, ...]] = field(default_factory=dict)

    def versions(self) -> Tuple[str, ...]:
        return tuple(self.releases)


@dataclass(frozen=True)
class ArtifactInfo:
    """Segments of a wheel filename."""
    distribution: str
    version: str
    build: Optional[str]
    python_tag: str
    abi_tag: str
    platform_tag: str
    extension: str = ".whl"

    @property
    def filename(self) -> str:
        parts = [self.distribution, self.version]
        if self.build is not None:
            parts.append(self.build)
        parts.extend([self.python_tag, self.abi_tag, self.platform_tag])
        return "-".join(parts) + self.extension

    @property
    def platform_tags(self) -> Tuple[str, ...]:
        """Expand a compressed tag set such as ``manylinux1_x86_64.linux_x86_64``."""
        return tuple(self.platform_tag.split("."))


@dataclass(frozen=True)
class VersionConstraint:
    """Operator plus dotted numeric version, e.g. ``>=3.7``."""
    operator: Operator
    version: str

    def __str__(self) -> str:
        return f"{self.operator.value}{self.version}"


@dataclass(frozen=True)
class ResolvedArtifact:
    """Artifact chosen by the resolver; input to the download stage."""
    filename: str
    info: ArtifactInfo
    url: str
    size: int
    sha256: Optional[str] = None


@dataclass(frozen=True)
class ResolverConfig:
    """Target interpreter and platform the artifact must run on."""
    runtime_version: str
    platform: str


@dataclass(frozen=True)
class PackageRequest:
    """Parsed ``name[==version]`` request."""
    name: str
    requested_version: Optional[str]
    raw_token: Optional[str] = None

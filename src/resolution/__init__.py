"""Wheel resolution engine: filename parsing, runtime matching, selection."""

from .artifact_name import parse_artifact_name
from .candidates import select_candidates
from .constraints import matches, parse_constraint
from .errors import (
    ArtifactNameError,
    ConstraintParseError,
    EvaluationError,
    InvalidRequestError,
    NoMatchError,
    ParseFailure,
    ResolutionError,
)
from .models import (
    ArtifactInfo,
    IndexMetadata,
    PackageRequest,
    ReleaseDescriptor,
    ResolvedArtifact,
    ResolverConfig,
    VersionConstraint,
)
from .resolver import ArtifactResolver, resolve

__all__ = [
    "ArtifactInfo",
    "ArtifactNameError",
    "ArtifactResolver",
    "ConstraintParseError",
    "EvaluationError",
    "IndexMetadata",
    "InvalidRequestError",
    "NoMatchError",
    "PackageRequest",
    "ParseFailure",
    "ReleaseDescriptor",
    "ResolutionError",
    "ResolvedArtifact",
    "ResolverConfig",
    "VersionConstraint",
    "matches",
    "parse_artifact_name",
    "parse_constraint",
    "resolve",
    "select_candidates",
]

"""Artifact resolution: pick the newest wheel that fits the target runtime.

Candidates are walked newest version first and, within a version, in the
order the index lists its files. The first file passing every check wins;
there is no scoring and no backtracking.
"""

import logging
from typing import Optional, Tuple

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants

from .artifact_name import is_wheel_filename, parse_artifact_name
from .candidates import select_candidates
from .constraints import requirement_for_release, runtime_satisfies
from .errors import EvaluationError, NoMatchError, ParseFailure
from .models import (
    ArtifactInfo,
    IndexMetadata,
    ReleaseDescriptor,
    ResolvedArtifact,
    ResolverConfig,
)

logger = logging.getLogger(__name__)


class ArtifactResolver:
    """Resolve index metadata to a single downloadable artifact.

    Holds only the immutable target configuration, so one instance can be
    shared freely between callers and threads.
    """

    def __init__(self, config: ResolverConfig):
        self.config = config

    def platform_matches(self, info: ArtifactInfo) -> bool:
        """Accept the exact target platform or a platform-independent wheel."""
        accepted = (self.config.platform, Constants.UNIVERSAL_PLATFORM)
        return any(tag in accepted for tag in info.platform_tags)

    def evaluate(self, release: ReleaseDescriptor) -> Tuple[Optional[ArtifactInfo], str]:
        """Check one release against the target.

        Returns:
            (parsed info, "ok") on acceptance, else (None, reason).
        """
        if not is_wheel_filename(release.filename):
            return None, "not_a_wheel"

        try:
            requirement = requirement_for_release(release)
            if not runtime_satisfies(self.config.runtime_version, requirement):
                return None, "runtime_mismatch"
        except (ParseFailure, EvaluationError) as exc:
            return None, f"runtime_unparseable: {exc}"

        try:
            info = parse_artifact_name(release.filename)
        except ParseFailure:
            return None, "bad_filename"

        if not self.platform_matches(info):
            return None, "platform_mismatch"
        return info, "ok"

    def resolve(self, index: IndexMetadata, requested_version: Optional[str] = None) -> ResolvedArtifact:
        """Return the first acceptable artifact, newest version first.

        Raises:
            InvalidRequestError: ``requested_version`` is malformed.
            NoMatchError: no release of any candidate version fits.
        """
        candidates = select_candidates(index, requested_version)
        debug = is_debug_enabled(logger)

        for candidate in candidates:
            for release in index.releases.get(candidate, ()):
                info, reason = self.evaluate(release)
                if info is None:
                    if debug:
                        logger.debug(
                            "Skipping %s: %s",
                            release.filename,
                            reason,
                            extra=extra_context(
                                event="decision",
                                component="resolver",
                                action="evaluate",
                                outcome="skip",
                                package=index.name,
                                candidate=candidate,
                            ),
                        )
                    continue

                logger.debug(
                    "Selected %s",
                    release.filename,
                    extra=extra_context(
                        event="decision",
                        component="resolver",
                        action="evaluate",
                        outcome="selected",
                        package=index.name,
                        candidate=candidate,
                    ),
                )
                return ResolvedArtifact(
                    filename=release.filename,
                    info=info,
                    url=release.url,
                    size=release.size,
                    sha256=release.sha256,
                )

        raise NoMatchError(
            index.name,
            requested_version,
            self.config.runtime_version,
            self.config.platform,
        )


def resolve(
    index: IndexMetadata,
    runtime_version: str,
    platform: str,
    requested_version: Optional[str] = None,
) -> ResolvedArtifact:
    """Functional shortcut for ``ArtifactResolver(...).resolve(...)``."""
    config = ResolverConfig(runtime_version=runtime_version, platform=platform)
    return ArtifactResolver(config).resolve(index, requested_version)

"""Failure types raised by the resolution engine."""

from typing import Optional


class ResolutionError(Exception):
    """Base class for all resolution failures."""


class ParseFailure(ResolutionError, ValueError):
    """A filename, requirement or request did not match its grammar."""


class ArtifactNameError(ParseFailure):
    """Filename is not a well-formed wheel name."""


class ConstraintParseError(ParseFailure):
    """Runtime requirement expression is malformed."""


class InvalidRequestError(ParseFailure):
    """The user-supplied package request cannot be resolved at all."""


class EvaluationError(ResolutionError, ValueError):
    """A version could not be compared as a dotted numeric version."""


class NoMatchError(ResolutionError):
    """No candidate satisfied the request.

    Carries the full request context so the CLI can print it verbatim.
    """

    def __init__(
        self,
        package: str,
        requested_version: Optional[str] = None,
        runtime_version: Optional[str] = None,
        platform: Optional[str] = None,
    ):
        self.package = package
        self.requested_version = requested_version
        self.runtime_version = runtime_version
        self.platform = platform
        super().__init__(self._render())

    def _render(self) -> str:
        target = self.package
        if self.requested_version:
            target = f"{self.package}=={self.requested_version}"
        if self.runtime_version is None and self.platform is None:
            return f"No version of {target} found"
        return (
            f"No compatible artifact for {target} "
            f"(python {self.runtime_version}, platform {self.platform})"
        )

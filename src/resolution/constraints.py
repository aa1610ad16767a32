"""Runtime requirement parsing and evaluation.

A requirement is an optional operator followed by a dotted numeric version
of two or three segments (``>=3.7``, ``3.10``, ``< 3.12.1``). Index entries
express the requirement either as a compact tag (``cp310``) or, for
version-independent wheels, through their ``requires_python`` field.
"""

import re
from typing import List, Optional, Union

from packaging import version

from constants import Constants

from .errors import ConstraintParseError, EvaluationError
from .models import Operator, ReleaseDescriptor, VersionConstraint

_CONSTRAINT_PATTERN = re.compile(
    r"^\s*(?P<op>>=|<=|==|>|<|=)?\s*(?P<version>[0-9]+\.[0-9]+(?:\.[0-9]+)?)\s*$"
)
_NUMERIC_VERSION = re.compile(r"^[0-9]+\.[0-9]+(?:\.[0-9]+)?$")
_CPYTHON_TAG = re.compile(r"^cp(?P<major>[0-9])(?P<minor>[0-9]+)$")

_OPERATORS = {
    "==": Operator.EQ,
    "=": Operator.EQ,
    ">=": Operator.GE,
    "<=": Operator.LE,
    ">": Operator.GT,
    "<": Operator.LT,
}


def parse_constraint(requirement: str) -> VersionConstraint:
    """Parse ``[op] X.Y[.Z]``; the operator defaults to ``==``.

    Raises:
        ConstraintParseError: on any other shape, including pre-release or
            otherwise non-numeric segments.
    """
    match = _CONSTRAINT_PATTERN.match(requirement or "")
    if not match:
        raise ConstraintParseError(f"Invalid runtime requirement: {requirement!r}")
    operator = _OPERATORS[match.group("op") or "=="]
    return VersionConstraint(operator=operator, version=match.group("version"))


def parse_requirement_set(requirement: str) -> List[VersionConstraint]:
    """Parse a comma-separated conjunction such as ``>=3.8, <4.0``.

    A single clause behaves exactly like :func:`parse_constraint`.
    """
    clauses = (requirement or "").split(",")
    return [parse_constraint(clause) for clause in clauses]


def numeric_version(value: str) -> version.Version:
    """Parse ``X.Y[.Z]`` with ASCII digits only.

    Raises:
        EvaluationError: any other shape, or a value packaging rejects.
    """
    text = (value or "").strip()
    if not _NUMERIC_VERSION.match(text):
        raise EvaluationError(f"Not a dotted numeric version: {value!r}")
    try:
        return version.Version(text)
    except ValueError as exc:  # InvalidVersion, or an oversized digit run
        raise EvaluationError(f"Not a dotted numeric version: {value!r}") from exc


def matches(actual: str, constraint: Union[VersionConstraint, str]) -> bool:
    """Evaluate ``actual`` against ``constraint``.

    Missing trailing segments count as zero, so ``3.10`` equals ``3.10.0``.

    Raises:
        ConstraintParseError: ``constraint`` is a malformed string.
        EvaluationError: either side is not a dotted numeric version.
    """
    if isinstance(constraint, str):
        constraint = parse_constraint(constraint)
    left = numeric_version(actual)
    right = numeric_version(constraint.version)

    if constraint.operator is Operator.EQ:
        return left == right
    if constraint.operator is Operator.GE:
        return left >= right
    if constraint.operator is Operator.LE:
        return left <= right
    if constraint.operator is Operator.GT:
        return left > right
    return left < right


def is_generic_python_tag(tag: str) -> bool:
    """True for tags meaning any Python 3 (``py3``, ``py2.py3``)."""
    return Constants.GENERIC_PYTHON_TAG in (tag or "").split(".")


def requirement_for_release(release: ReleaseDescriptor) -> Optional[str]:
    """Translate a release's declared compatibility into a requirement string.

    ``cp310`` becomes ``3.10``. A generic py3 tag defers to the release's
    ``requires_python`` and is unconstrained (None) without one.

    Raises:
        ConstraintParseError: the tag is neither CPython-specific nor generic.
    """
    tag = (release.python_version or "").strip()
    cpython = _CPYTHON_TAG.match(tag)
    if cpython:
        return f"{cpython.group('major')}.{cpython.group('minor')}"
    if is_generic_python_tag(tag):
        declared = (release.requires_python or "").strip()
        return declared or None
    raise ConstraintParseError(f"Unsupported python tag: {tag!r}")


def runtime_satisfies(runtime_version: str, requirement: Optional[str]) -> bool:
    """Check ``runtime_version`` against every clause of ``requirement``."""
    if requirement is None:
        return True
    return all(matches(runtime_version, clause) for clause in parse_requirement_set(requirement))

"""
versionroute — Version Constraint
===================================

What:  A route's version requirement: either one exact version or an
       inclusive [min, max] range with an optional upper bound.
How:   Frozen dataclass built once at registration time via
       ``from_declaration()`` (or the ``exactly()``/``between()`` shortcuts),
       which parse and validate the declared strings eagerly.
Who:   Attached to routes by VersionedRouter; evaluated by RouteResolver.

Matching (``matches``):
    absent / empty / malformed header → no match (never raises)
    exact set                         → header == exact
    otherwise                         → min <= header and (max is None or header <= max)

Dispatch priority (``priority``, smaller = chosen first):
    1. exact outranks range
    2. exact vs exact: larger version first
    3. range vs range: larger min first
    4. equal mins: narrower range first (unbounded max is the widest)
    5. anything else is a tie; callers keep registration order
"""

import logging
from dataclasses import dataclass
from typing import Optional

from versionroute.exceptions import InvalidVersionFormatError, RouteRegistrationError
from versionroute.versioning.semantic_version import DEFAULT_MIN_VERSION, SemanticVersion

logger = logging.getLogger(__name__)

DEFAULT_VERSION_HEADER = "api-version"


@dataclass(frozen=True)
class VersionConstraint:
    """
    Exact-or-range version requirement read from one request header.

    Attributes:
        exact:       When set, only this version matches and the range
                     fields are ignored.
        range_min:   Inclusive lower bound (default ``0.0.1``).
        range_max:   Inclusive upper bound; None means unbounded.
        header_name: Request header carrying the client's version.
    """

    exact: Optional[SemanticVersion] = None
    range_min: SemanticVersion = DEFAULT_MIN_VERSION
    range_max: Optional[SemanticVersion] = None
    header_name: str = DEFAULT_VERSION_HEADER

    # ── Construction ──────────────────────────────────────────────────────

    @classmethod
    def from_declaration(
        cls,
        value: str = "",
        min: str = str(DEFAULT_MIN_VERSION),
        max: str = "",
        header: str = DEFAULT_VERSION_HEADER,
    ) -> "VersionConstraint":
        """
        Build a constraint from declared configuration strings.

        Args:
            value:  Exact version; empty string means unset (range mode).
            min:    Range lower bound.
            max:    Range upper bound; empty string means unbounded.
            header: Header name to read the request version from.

        Raises:
            RouteRegistrationError: A declared version is unparsable, the
                header name is empty, or ``max`` is below ``min``.
        """
        if not header or not header.strip():
            raise RouteRegistrationError("Version header name must not be empty", field="header")

        exact = _parse_declared("value", value) if value else None
        range_min = _parse_declared("min", min)
        range_max = _parse_declared("max", max) if max else None

        if exact is None and range_max is not None and range_max < range_min:
            raise RouteRegistrationError(
                f"Declared range can never match: max {range_max} is below min {range_min}",
                field="max",
                context={"min": str(range_min), "max": str(range_max)},
            )

        return cls(
            exact=exact,
            range_min=range_min,
            range_max=range_max,
            header_name=header.strip().lower(),
        )

    @classmethod
    def exactly(cls, value: str, header: str = DEFAULT_VERSION_HEADER) -> "VersionConstraint":
        """Constraint satisfied by ``value`` only."""
        if not value:
            raise RouteRegistrationError("Exact version must not be empty", field="value")
        return cls.from_declaration(value=value, header=header)

    @classmethod
    def between(
        cls,
        min: str = str(DEFAULT_MIN_VERSION),
        max: str = "",
        header: str = DEFAULT_VERSION_HEADER,
    ) -> "VersionConstraint":
        """Inclusive range constraint; omit ``max`` for an open upper end."""
        return cls.from_declaration(min=min, max=max, header=header)

    # ── Evaluation ────────────────────────────────────────────────────────

    @property
    def is_exact(self) -> bool:
        return self.exact is not None

    def matches(self, header_value: Optional[str]) -> bool:
        """
        Check a raw request header value against this constraint.

        Absent, empty and malformed values are non-matches; parse errors are
        swallowed here and never reach the caller.
        """
        if not header_value:
            return False

        try:
            requested = SemanticVersion.parse(header_value)
        except InvalidVersionFormatError:
            logger.debug("Ignoring malformed %s header: %r", self.header_name, header_value)
            return False

        if self.exact is not None:
            return requested == self.exact

        if requested < self.range_min:
            return False
        return self.range_max is None or requested <= self.range_max

    def combine(self, method_level: "VersionConstraint") -> "VersionConstraint":
        """
        Merge a group-level constraint (self) with a handler-level one.

        The handler-level constraint replaces the group-level one entirely;
        no fields are carried over. Call as ``group.combine(handler)``.
        """
        return method_level

    def priority(self, other: "VersionConstraint") -> int:
        """
        Order two constraints for dispatch.

        Returns:
            -1 if self should be chosen before other, 1 if after, 0 on a tie.
            A pair containing a hand-built constraint with non-version bound
            fields is treated as a tie instead of raising.
        """
        if not (self._is_well_formed() and other._is_well_formed()):
            logger.debug("Treating malformed constraint pair as equal: %s / %s", self, other)
            return 0

        if self.is_exact and not other.is_exact:
            return -1
        if other.is_exact and not self.is_exact:
            return 1

        if self.is_exact and other.is_exact:
            return other.exact.compare(self.exact)

        if self.range_min != other.range_min:
            return other.range_min.compare(self.range_min)

        return _compare_upper_bounds(self.range_max, other.range_max)

    def _is_well_formed(self) -> bool:
        if self.exact is not None and not isinstance(self.exact, SemanticVersion):
            return False
        if not isinstance(self.range_min, SemanticVersion):
            return False
        return self.range_max is None or isinstance(self.range_max, SemanticVersion)

    def __str__(self) -> str:
        if self.exact is not None:
            return f"VersionConstraint[value={self.exact}]"
        upper = self.range_max if self.range_max is not None else "*"
        return f"VersionConstraint[{self.range_min}-{upper}]"


def match(constraint: VersionConstraint, header_value: Optional[str]) -> bool:
    """Free-function form of VersionConstraint.matches for any router."""
    return constraint.matches(header_value)


def priority(a: VersionConstraint, b: VersionConstraint) -> int:
    """Free-function form of VersionConstraint.priority for any router."""
    return a.priority(b)


def _compare_upper_bounds(
    mine: Optional[SemanticVersion], theirs: Optional[SemanticVersion]
) -> int:
    # Mins are equal here, so the narrower span is the smaller max.
    if mine is None and theirs is None:
        return 0
    if mine is None:
        return 1
    if theirs is None:
        return -1
    return mine.compare(theirs)


def _parse_declared(field: str, text: str) -> SemanticVersion:
    try:
        return SemanticVersion.parse(text)
    except InvalidVersionFormatError as e:
        raise RouteRegistrationError(
            f"Declared {field} {text!r} is not a valid version: {e.reason}",
            field=field,
            context={"value": text},
        ) from e

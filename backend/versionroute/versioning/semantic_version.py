"""
versionroute — Semantic Version Value Type
============================================

What:  Immutable ``major.minor.patch`` version with parsing and total ordering.
How:   Frozen dataclass; ordering is the dataclass tuple order, i.e. major,
       then minor, then patch.
Who:   Used by VersionConstraint for declared bounds and request headers.
When:  Declared versions are parsed once at registration; request versions
       are parsed fresh on every match attempt (no caching).

Accepted input:
    "1.2.3", " 1.2.3 ", "01.2.3"   → valid (surrounding whitespace trimmed)
    "1.2", "1.2.3.4", "1.2.x"     → InvalidVersionFormatError
    "-1.2.3", "+1.2.3", "1.2.3-rc" → InvalidVersionFormatError

No pre-release or build metadata: the text form is always exactly
``major.minor.patch``.
"""

import re
from dataclasses import dataclass

from versionroute.exceptions import InvalidVersionFormatError

_COMPONENT = re.compile(r"\d+", re.ASCII)


@dataclass(frozen=True, order=True)
class SemanticVersion:
    """
    Semantic version representation.

    Attributes:
        major: Major version number (non-negative).
        minor: Minor version number (non-negative).
        patch: Patch version number (non-negative).
    """

    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        for component in (self.major, self.minor, self.patch):
            if isinstance(component, bool) or not isinstance(component, int) or component < 0:
                raise InvalidVersionFormatError(
                    f"{self.major}.{self.minor}.{self.patch}",
                    "All components must be non-negative integers",
                )

    @classmethod
    def parse(cls, version: str) -> "SemanticVersion":
        """
        Parse a semantic version string.

        Args:
            version: Version string in format "major.minor.patch".

        Returns:
            Parsed SemanticVersion instance.

        Raises:
            InvalidVersionFormatError: If the string does not have exactly
                three dot-separated non-negative integer components.
        """
        if not isinstance(version, str):
            raise InvalidVersionFormatError(repr(version), "Version must be a string")

        parts = version.strip().split(".")
        if len(parts) != 3:
            raise InvalidVersionFormatError(version)

        if not all(_COMPONENT.fullmatch(part) for part in parts):
            raise InvalidVersionFormatError(
                version, "All components must be non-negative integers"
            )

        major, minor, patch = (int(part) for part in parts)
        return cls(major, minor, patch)

    def compare(self, other: "SemanticVersion") -> int:
        """
        Three-way comparison.

        Returns:
            -1 if self < other, 0 if equal, 1 if self > other. The first
            differing component (major, then minor, then patch) decides.
        """
        if self < other:
            return -1
        if self > other:
            return 1
        return 0

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def __repr__(self) -> str:
        return f"SemanticVersion({self.major}, {self.minor}, {self.patch})"


def compare(a: SemanticVersion, b: SemanticVersion) -> int:
    """Three-way comparison of two versions; see SemanticVersion.compare."""
    return a.compare(b)


# Lowest version a range constraint admits when no ``min`` is declared.
DEFAULT_MIN_VERSION = SemanticVersion(0, 0, 1)

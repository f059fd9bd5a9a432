"""Subsonic protocol version parsing and comparison.

Servers report their protocol version as a dotted string ("1.16.1") in every
response envelope. This module turns those strings into comparable values so
callers can decide whether an endpoint generation is available.

Numeric form:
    major * 10000 + minor * 100 + patch

    The numeric form is only monotonic while minor and patch stay below 100,
    so larger components are rejected instead of silently wrapping.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

# Highest protocol version this library speaks.
SUPPORTED_API_VERSION = "1.16.1"

_COMPONENT_LIMIT = 100
_MAX_DIGITS = 9
_VERSION_RE = re.compile(r"^(\d+)(?:\.(\d+))?(?:\.(\d+))?(.*)$", re.DOTALL)
_EXTRA_COMPONENT_RE = re.compile(r"^((?:\.\d+)+)(.*)$", re.DOTALL)


class VersionOrder(Enum):
    """Result of comparing two parsed versions."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


@dataclass(frozen=True, order=True)
class ApiVersion:
    """A parsed protocol version.

    Instances order by (major, minor, patch), which matches the ordering of
    ``value``.

    Attributes:
        major: Major component
        minor: Minor component (0-99)
        patch: Patch component (0-99)
    """

    major: int
    minor: int = 0
    patch: int = 0

    @property
    def value(self) -> int:
        """Single ordered integer form of this version."""
        return self.major * 10000 + self.minor * 100 + self.patch

    @classmethod
    def parse(cls, text: Optional[str]) -> Optional["ApiVersion"]:
        """Parse a dotted version string.

        Args:
            text: Version string such as "1.16.1", "1.16" or "1.16.1-beta"

        Returns:
            ApiVersion, or None when the string is not a usable version

        Examples:
            >>> ApiVersion.parse("1.16")
            ApiVersion(major=1, minor=16, patch=0)
            >>> ApiVersion.parse("1.16.1 (Navidrome)").value
            11601
            >>> ApiVersion.parse("not-a-version") is None
            True
        """
        if not isinstance(text, str):
            return None

        match = _VERSION_RE.match(text.strip())
        if match is None:
            return None

        major, minor, patch, suffix = match.groups()
        if any(len(part) > _MAX_DIGITS for part in (major, minor, patch) if part):
            return None
        major_value = int(major)
        minor_value = int(minor) if minor is not None else 0
        patch_value = int(patch) if patch is not None else 0

        if suffix.startswith("."):
            # Extra numeric components ("1.16.1.0") are dropped; anything
            # else after a dot ("1.16.1.rc1", "1.") is ambiguous.
            extra = _EXTRA_COMPONENT_RE.match(suffix)
            if extra is None or extra.group(2).startswith("."):
                return None

        if minor_value >= _COMPONENT_LIMIT or patch_value >= _COMPONENT_LIMIT:
            return None

        return cls(major_value, minor_value, patch_value)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_version(text: Optional[str]) -> Tuple[Optional[int], bool]:
    """Parse a version string into its numeric form.

    Args:
        text: Dotted version string

    Returns:
        Tuple of (numeric value, ok). The value is None whenever ok is False.

    Examples:
        >>> parse_version("1.8")
        (10800, True)
        >>> parse_version("")
        (None, False)
    """
    version = ApiVersion.parse(text)
    if version is None:
        return None, False
    return version.value, True


def compare_versions(left: ApiVersion, right: ApiVersion) -> VersionOrder:
    """Compare two parsed versions."""
    if left < right:
        return VersionOrder.LESS
    if left > right:
        return VersionOrder.GREATER
    return VersionOrder.EQUAL


def is_at_least(text: Optional[str], threshold: str) -> bool:
    """Check whether a version string meets a minimum version.

    An unparseable ``text`` never satisfies the threshold.

    Args:
        text: Version string reported by a server
        threshold: Minimum version, e.g. "1.8.0"

    Returns:
        True if ``text`` parses and is >= ``threshold``

    Raises:
        ValueError: If ``threshold`` itself is not a valid version
    """
    minimum = ApiVersion.parse(threshold)
    if minimum is None:
        raise ValueError(f"Invalid threshold version: {threshold!r}")

    version = ApiVersion.parse(text)
    if version is None:
        return False
    return compare_versions(version, minimum) is not VersionOrder.LESS

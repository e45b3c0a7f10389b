"""
Version comparison utilities for dependency catalog decisions.

Versions are treated as a dotted numeric prefix followed by an optional
qualifier, e.g. ``3.0.1``, ``3.0-RC1`` or ``4.1.9.RELEASE``. A qualified
version sorts before the same numeric prefix without a qualifier.
"""

import re
from dataclasses import dataclass
from typing import Optional, Tuple

ANY_VERSION = "*"
RANGE_SEPARATOR = ">"

_VERSION_PATTERN = re.compile(r"^(\d+(?:\.\d+)*)(?:[.\-]?(.+))?$")


@dataclass(frozen=True)
class ParsedVersion:
    """Numeric segments plus an optional qualifier suffix."""

    numbers: Tuple[int, ...]
    qualifier: Optional[str] = None

    def _padded(self, length: int) -> Tuple[int, ...]:
        return self.numbers + (0,) * (length - len(self.numbers))

    def compare(self, other: "ParsedVersion") -> int:
        """Return -1, 0 or 1 as self sorts before, equal to, or after other."""
        length = max(len(self.numbers), len(other.numbers))
        left, right = self._padded(length), other._padded(length)
        if left != right:
            return -1 if left < right else 1

        if self.qualifier == other.qualifier:
            return 0
        # A release outranks any qualified build of the same numbers
        if self.qualifier is None:
            return 1
        if other.qualifier is None:
            return -1

        mine, theirs = self.qualifier.lower(), other.qualifier.lower()
        if mine == theirs:
            return 0
        return -1 if mine < theirs else 1


def parse_version(version: Optional[str]) -> Optional[ParsedVersion]:
    """
    Parse a version string.

    Args:
        version: Version text such as ``3.0`` or ``3.0-RC1``

    Returns:
        Optional[ParsedVersion]: Parsed version, or None if the text has no
        leading numeric segment or a segment too long to convert
    """
    if not version:
        return None

    match = _VERSION_PATTERN.match(version.strip())
    if not match:
        return None

    try:
        numbers = tuple(int(part) for part in match.group(1).split("."))
    except ValueError:
        # int() refuses segments past the interpreter's digit limit
        return None
    return ParsedVersion(numbers=numbers, qualifier=match.group(2) or None)


def compare_versions(left: str, right: str) -> int:
    """
    Compare two version strings.

    Raises:
        ValueError: If either version cannot be parsed
    """
    parsed_left = parse_version(left)
    parsed_right = parse_version(right)
    if parsed_left is None or parsed_right is None:
        raise ValueError(f"Cannot compare versions {left!r} and {right!r}")
    return parsed_left.compare(parsed_right)


def satisfies_constraint(candidate: Optional[str], constraint: str) -> bool:
    """
    Check a candidate version against a constraint expression.

    Supported constraints:
        ``*``        any version
        ``X``        exactly X
        ``L > *``    strictly greater than L, no upper bound
        ``L > U``    strictly greater than L and no greater than U

    Unparseable candidates or bounds never raise; they simply do not satisfy
    the constraint.
    """
    expression = (constraint or "").strip()
    if expression == ANY_VERSION:
        return True

    try:
        if RANGE_SEPARATOR in expression:
            lower, upper = (part.strip() for part in expression.split(RANGE_SEPARATOR, 1))
            if compare_versions(candidate or "", lower) <= 0:
                return False
            return upper == ANY_VERSION or compare_versions(candidate or "", upper) <= 0

        return compare_versions(candidate or "", expression) == 0
    except ValueError:
        return False

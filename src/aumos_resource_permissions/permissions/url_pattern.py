"""URL pattern specifications for web resource permissions.

A URLPatternSpec is a colon-separated list of servlet URL patterns. The
first pattern identifies the resources the permission covers; any further
patterns are carve-outs naming resources it does NOT cover.

Pattern types follow the servlet mapping rules:

- default      — the single pattern ``"/"``
- path-prefix  — starts with ``"/"`` and ends with ``"/*"`` (``"/*"`` included)
- extension    — starts with ``"*."``
- exact        — anything else

Example
-------
::

    spec = URLPatternSpec("/admin/*:/admin/public/*")
    assert spec.implies(URLPatternSpec("/admin/users"))
    assert not spec.implies(URLPatternSpec("/admin/public/index.html"))
"""
from __future__ import annotations

import logging
from enum import Enum

logger = logging.getLogger(__name__)

DEFAULT_PATTERN: str = "/"
THE_PATH_PREFIX_PATTERN: str = "/*"


class MalformedSpecError(ValueError):
    """Raised when a URLPatternSpec violates the pattern-list constraints.

    Attributes
    ----------
    spec:
        The full spec string being parsed.
    pattern:
        The carve-out pattern that caused the failure, if any.
    """

    def __init__(self, message: str, spec: str, pattern: str | None = None) -> None:
        self.spec = spec
        self.pattern = pattern
        super().__init__(f"Malformed URLPatternSpec {spec!r}: {message}")


class PatternType(str, Enum):
    """Servlet URL pattern categories."""

    DEFAULT = "default"
    PATH_PREFIX = "path_prefix"
    EXTENSION = "extension"
    EXACT = "exact"


def pattern_type(pattern: str) -> PatternType:
    """Classify *pattern* according to the servlet mapping rules."""
    if pattern == DEFAULT_PATTERN:
        return PatternType.DEFAULT
    if pattern.startswith("/") and pattern.endswith("/*"):
        return PatternType.PATH_PREFIX
    if pattern.startswith("*."):
        return PatternType.EXTENSION
    return PatternType.EXACT


def pattern_matches(reference: str, candidate: str) -> bool:
    """Return True if the *reference* pattern matches the *candidate* pattern.

    Comparisons are case sensitive.

    Parameters
    ----------
    reference:
        The pattern doing the matching (e.g. ``"/a/*"``).
    candidate:
        The pattern or path being matched (e.g. ``"/a/b"``).

    Returns
    -------
    bool
    """
    if reference == candidate:
        return True
    kind = pattern_type(reference)
    if kind is PatternType.DEFAULT:
        return True
    if kind is PatternType.PATH_PREFIX:
        if reference == THE_PATH_PREFIX_PATTERN:
            return True
        prefix = reference[:-2]
        if not candidate.startswith(prefix):
            return False
        return len(candidate) == len(prefix) or candidate[len(prefix)] == "/"
    if kind is PatternType.EXTENSION:
        return candidate.endswith(reference[1:])
    return False


class URLPatternSpec:
    """A primary URL pattern plus the carve-out patterns it excludes.

    Instances are immutable once constructed.

    Parameters
    ----------
    spec:
        ``pattern (":" pattern)*``. ``None`` or an empty string is
        translated to the default pattern ``"/"``. Empty tokens between
        colons are skipped.

    Raises
    ------
    MalformedSpecError
        If a carve-out pattern repeats or is not permitted for the type of
        the primary pattern.
    """

    __slots__ = ("_primary", "_excluded", "_hash")

    def __init__(self, spec: str | None = None) -> None:
        raw = spec or DEFAULT_PATTERN
        tokens = [token for token in raw.split(":") if token]
        if not tokens:
            tokens = [DEFAULT_PATTERN]

        primary = tokens[0]
        excluded: list[str] = []
        seen: set[str] = {primary}
        for pattern in tokens[1:]:
            if pattern in seen:
                raise MalformedSpecError(
                    f"pattern {pattern!r} occurs more than once.", raw, pattern
                )
            seen.add(pattern)
            _validate_carve_out(primary, pattern, raw)
            excluded.append(pattern)

        self._primary = primary
        self._excluded: frozenset[str] = frozenset(excluded)
        self._hash = hash(self._primary) + hash(self._excluded)
        logger.debug(
            "Parsed URLPatternSpec primary=%s excluded=%s",
            primary,
            sorted(self._excluded),
        )

    @property
    def primary(self) -> str:
        """The first pattern of the spec."""
        return self._primary

    @property
    def excluded_patterns(self) -> frozenset[str]:
        """Carve-out patterns this spec does not cover."""
        return self._excluded

    @property
    def primary_type(self) -> PatternType:
        """Servlet pattern type of the primary pattern."""
        return pattern_type(self._primary)

    def implies(self, other: URLPatternSpec) -> bool:
        """Return True if this spec covers every resource *other* covers.

        Parameters
        ----------
        other:
            The URLPatternSpec being tested.

        Returns
        -------
        bool
        """
        if not pattern_matches(self._primary, other._primary):
            return False

        for carve_out in self._excluded:
            if pattern_matches(carve_out, other._primary):
                return False

        # Same primary: other must carve out at least what this spec does.
        if self._primary == other._primary:
            for carve_out in self._excluded:
                if not any(
                    pattern_matches(theirs, carve_out) for theirs in other._excluded
                ):
                    return False

        return True

    def hash(self) -> int:
        """Return the combined hash of the primary and carve-out patterns."""
        return self._hash

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, URLPatternSpec):
            return NotImplemented
        return self.implies(other) and other.implies(self)

    def __str__(self) -> str:
        return ":".join([self._primary, *sorted(self._excluded)])

    def __repr__(self) -> str:
        return f"URLPatternSpec({str(self)!r})"


def _validate_carve_out(primary: str, pattern: str, spec: str) -> None:
    """Raise MalformedSpecError if *pattern* may not follow *primary*."""
    primary_kind = pattern_type(primary)
    kind = pattern_type(pattern)

    if primary_kind is PatternType.EXACT:
        raise MalformedSpecError(
            "an exact first pattern cannot have a pattern list.", spec, pattern
        )

    if primary_kind is PatternType.PATH_PREFIX:
        if kind is PatternType.EXACT and pattern_matches(primary, pattern):
            return
        if kind is PatternType.PATH_PREFIX and pattern_matches(primary, pattern):
            return
        raise MalformedSpecError(
            f"{pattern!r} must be an exact or path-prefix pattern matched by {primary!r}.",
            spec,
            pattern,
        )

    if primary_kind is PatternType.EXTENSION:
        if kind is PatternType.EXACT and pattern_matches(primary, pattern):
            return
        if kind is PatternType.PATH_PREFIX:
            return
        raise MalformedSpecError(
            f"{pattern!r} must be a path-prefix pattern or an exact pattern "
            f"matched by {primary!r}.",
            spec,
            pattern,
        )

    # Default primary: anything except the default pattern itself.
    if kind is PatternType.DEFAULT:
        raise MalformedSpecError(
            "the default pattern cannot be excluded from itself.", spec, pattern
        )

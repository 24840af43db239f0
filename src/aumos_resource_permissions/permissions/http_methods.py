"""Canonical HTTP method sets for web resource permissions.

A MethodSet is one of three kinds:

- ``ALL``     — every HTTP method (the canonical form of the full set)
- ``INCLUDE`` — exactly the listed methods
- ``EXCLUDE`` — every method except the listed ones (an exception list)

Method names are kept sorted and de-duplicated. Tokens outside the seven
standard methods are preserved verbatim.

Example
-------
::

    methods = MethodSet.parse("POST,GET,GET")
    assert methods.to_actions_string() == "GET,POST"
    assert MethodSet.parse("GET,POST,PUT,DELETE,HEAD,OPTIONS,TRACE").is_all
    assert MethodSet.parse("!PUT").kind is MethodSetKind.EXCLUDE
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

ALL_HTTP_METHODS: frozenset[str] = frozenset(
    ["GET", "POST", "PUT", "DELETE", "HEAD", "OPTIONS", "TRACE"]
)

EXCEPTION_LIST_PREFIX: str = "!"


class MethodSetKind(str, Enum):
    """Which side of the method universe a MethodSet enumerates."""

    ALL = "all"
    INCLUDE = "include"
    EXCLUDE = "exclude"


@dataclass(frozen=True)
class MethodSet:
    """Immutable canonical HTTP method set.

    Attributes
    ----------
    kind:
        ALL, INCLUDE or EXCLUDE.
    methods:
        Sorted, de-duplicated method names. Always empty for ALL.
    """

    kind: MethodSetKind = MethodSetKind.ALL
    methods: tuple[str, ...] = ()

    @classmethod
    def all(cls) -> MethodSet:
        """Return the set covering every HTTP method."""
        return cls()

    @classmethod
    def parse(cls, actions: str | Iterable[str] | None) -> MethodSet:
        """Build a canonical MethodSet from an actions string or method list.

        Parameters
        ----------
        actions:
            ``None`` or ``""`` for all methods; a comma-separated string,
            optionally prefixed with ``"!"`` to list excluded methods; or an
            iterable of method names (always include mode).

        Returns
        -------
        MethodSet
        """
        if actions is None:
            return cls.all()
        if isinstance(actions, str):
            if actions.startswith(EXCEPTION_LIST_PREFIX):
                tokens = _split_methods(actions[len(EXCEPTION_LIST_PREFIX):])
                return cls.excluding(tokens)
            return cls.including(_split_methods(actions))
        return cls.including(actions)

    @classmethod
    def including(cls, methods: Iterable[str]) -> MethodSet:
        """Return the canonical include-mode set for *methods*."""
        canonical = frozenset(methods)
        if not canonical or canonical == ALL_HTTP_METHODS:
            return cls.all()
        return cls(MethodSetKind.INCLUDE, tuple(sorted(canonical)))

    @classmethod
    def excluding(cls, methods: Iterable[str]) -> MethodSet:
        """Return the canonical exception-list set for *methods*.

        A bare ``"!"`` with no methods excludes every standard method.
        """
        canonical = frozenset(methods)
        if not canonical:
            canonical = ALL_HTTP_METHODS
        return cls(MethodSetKind.EXCLUDE, tuple(sorted(canonical)))

    @property
    def is_all(self) -> bool:
        return self.kind is MethodSetKind.ALL

    @property
    def is_include(self) -> bool:
        return self.kind is MethodSetKind.INCLUDE

    @property
    def is_exclude(self) -> bool:
        return self.kind is MethodSetKind.EXCLUDE

    def subset_of(self, other: MethodSet) -> bool:
        """Return True if this set's methods are all listed in *other*.

        Only meaningful when both sides are enumerated; ALL on either side
        is the caller's concern.
        """
        return set(self.methods).issubset(other.methods)

    def covers(self, method: str) -> bool:
        """Return True if a request using *method* falls inside this set."""
        if self.kind is MethodSetKind.ALL:
            return True
        if self.kind is MethodSetKind.INCLUDE:
            return method in self.methods
        return method not in self.methods

    def to_actions_string(self) -> str | None:
        """Render the canonical string form.

        ``None`` for ALL, ``"GET,POST"`` for INCLUDE and ``"!PUT"`` for
        EXCLUDE. ``MethodSet.parse`` accepts every value this returns.
        """
        if self.kind is MethodSetKind.ALL:
            return None
        joined = ",".join(self.methods)
        if self.kind is MethodSetKind.EXCLUDE:
            return EXCEPTION_LIST_PREFIX + joined
        return joined

    def __hash__(self) -> int:
        if self.kind is MethodSetKind.ALL:
            return 0
        return hash(frozenset(self.methods))

    def __str__(self) -> str:
        return self.to_actions_string() or "<all>"


def _split_methods(actions: str) -> list[str]:
    """Split a comma-separated method list, dropping empty tokens."""
    return [token for token in actions.split(",") if token]

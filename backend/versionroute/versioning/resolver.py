"""
versionroute — Route Resolver
===============================

What:  Picks the single handler that should serve a request, given the
       candidate routes registered for its path and method.
How:   Each candidate's effective constraint is matched against the version
       header it names; matches are sorted by VersionConstraint.priority and
       the first one wins.
Who:   Called by VersionedAPIRoute for every HTTP request, and directly by
       the route introspection endpoint.

Resolution protocol:
    1. For every candidate, compute its effective constraint
       (handler-level if declared, else group-level, else none).
    2. Read the header named by that constraint and call ``matches``.
       Routes with no constraint always match.
    3. No matches          → None / NoMatchingRouteError
       One match           → that route
       Several matches     → stable sort by priority, take the first.
                             Unconstrained routes sort after every constraint.

Concurrency:
    RouteTable is written during a single-writer registration phase and then
    frozen. Each (path, method) entry is an immutable tuple that is swapped
    in whole, so a resolution call always sees one consistent snapshot.
    Resolution itself holds no state and needs no locks.
"""

import logging
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from versionroute.exceptions import NoMatchingRouteError
from versionroute.versioning.constraint import VersionConstraint

logger = logging.getLogger(__name__)

# name → header value (or None when absent)
HeaderReader = Callable[[str], Optional[str]]

RouteKey = Tuple[str, str]


@dataclass(frozen=True, eq=False)
class VersionedRoute:
    """
    A registered handler with its declared constraints.

    Attributes:
        handler_id:        Opaque handle returned to the transport layer.
        class_constraint:  Group-level constraint (router / controller), if any.
        method_constraint: Handler-level constraint, if any.
        name:              Display name for logs and introspection.
    """

    handler_id: Any
    class_constraint: Optional[VersionConstraint] = None
    method_constraint: Optional[VersionConstraint] = None
    name: str = ""

    @property
    def effective_constraint(self) -> Optional[VersionConstraint]:
        if self.method_constraint is not None:
            if self.class_constraint is not None:
                return self.class_constraint.combine(self.method_constraint)
            return self.method_constraint
        return self.class_constraint

    def accepts(self, header_reader: HeaderReader) -> bool:
        constraint = self.effective_constraint
        if constraint is None:
            return True
        return constraint.matches(header_reader(constraint.header_name))

    def __str__(self) -> str:
        constraint = self.effective_constraint
        label = self.name or repr(self.handler_id)
        return f"{label} [{constraint if constraint is not None else 'unversioned'}]"


def compare_routes(a: VersionedRoute, b: VersionedRoute) -> int:
    """Priority comparator over routes; unconstrained routes sort last."""
    ca, cb = a.effective_constraint, b.effective_constraint
    if ca is None and cb is None:
        return 0
    if ca is None:
        return 1
    if cb is None:
        return -1
    return ca.priority(cb)


class RouteTable:
    """
    Candidate routes grouped by (path, METHOD).

    Usage::

        table = RouteTable()
        table.add("/api/hello", "GET", VersionedRoute(handler, method_constraint=c))
        table.freeze()
        table.candidates("/api/hello", "GET")
    """

    def __init__(self) -> None:
        self._entries: Dict[RouteKey, Tuple[VersionedRoute, ...]] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def add(self, path: str, method: str, route: VersionedRoute) -> None:
        """Register a candidate. Must be called before freeze()."""
        if self._frozen:
            raise RuntimeError("Cannot add routes after the route table is frozen.")

        key = (path, method.upper())
        existing = self._entries.get(key, ())
        new_constraint = route.effective_constraint
        for other in existing:
            if other.effective_constraint == new_constraint:
                logger.warning(
                    "Ambiguous versioned routes for %s %s: %s and %s share %s; "
                    "the first registered wins",
                    key[1], key[0], other.name, route.name,
                    new_constraint if new_constraint is not None else "no constraint",
                )
                break

        self._entries[key] = existing + (route,)

    def freeze(self) -> None:
        """Close the registration phase."""
        self._frozen = True

    def candidates(self, path: str, method: str) -> Tuple[VersionedRoute, ...]:
        return self._entries.get((path, method.upper()), ())

    def items(self) -> List[Tuple[RouteKey, Tuple[VersionedRoute, ...]]]:
        return sorted(self._entries.items(), key=lambda item: item[0])

    def routes(self) -> List[Tuple[str, str, VersionedRoute]]:
        """Every candidate as (path, METHOD, route), ordered by key then registration."""
        return [
            (path, method, route)
            for (path, method), candidates in self.items()
            for route in candidates
        ]

    def __len__(self) -> int:
        return sum(len(routes) for routes in self._entries.values())


class RouteResolver:
    """
    Stateless selection of one route per request.

    Safe to call concurrently and repeatedly; never mutates the table.
    """

    def __init__(self, table: RouteTable) -> None:
        self.table = table

    def select(
        self, candidates: Iterable[VersionedRoute], header_reader: HeaderReader
    ) -> Optional[VersionedRoute]:
        """Return the highest-priority matching candidate, or None."""
        matched = [route for route in candidates if route.accepts(header_reader)]
        if not matched:
            return None
        if len(matched) == 1:
            return matched[0]
        return sorted(matched, key=cmp_to_key(compare_routes))[0]

    def lookup(
        self, path: str, method: str, header_reader: HeaderReader
    ) -> Optional[VersionedRoute]:
        selected = self.select(self.table.candidates(path, method), header_reader)
        if selected is not None:
            logger.debug("Resolved %s %s → %s", method, path, selected)
        return selected

    def resolve_route(
        self, path: str, method: str, header_reader: HeaderReader
    ) -> VersionedRoute:
        """
        Like lookup(), but a miss is an error.

        Raises:
            NoMatchingRouteError: No candidate matched (NoMatch).
        """
        selected = self.lookup(path, method, header_reader)
        if selected is None:
            raise NoMatchingRouteError(
                path=path,
                method=method.upper(),
                requested_version=_first_requested_version(
                    self.table.candidates(path, method), header_reader
                ),
            )
        return selected

    def resolve(self, path: str, method: str, header_reader: HeaderReader) -> Any:
        """Resolve a request to a handler id; raises NoMatchingRouteError on a miss."""
        return self.resolve_route(path, method, header_reader).handler_id


def _first_requested_version(
    candidates: Sequence[VersionedRoute], header_reader: HeaderReader
) -> Optional[str]:
    for route in candidates:
        constraint = route.effective_constraint
        if constraint is not None:
            return header_reader(constraint.header_name)
    return None

"""Compiled router with trie-based path matching.

Routes are registered during setup and compiled into an immutable
lookup structure when the app freezes. After ``compile()`` the trie is
only read, so concurrent requests need no locking.

Matching rules:

- literal segments match exactly (case-sensitive);
- a variable segment matches any single non-empty path component;
- at each depth a literal child is tried before the variable child, with
  backtracking, so registration order never affects the result;
- trailing slashes are ignored (``/x`` and ``/x/`` are the same path).

Variable names do not distinguish patterns: ``/a/:x`` and ``/a/:y``
are the same pattern, and registering both for one method raises
``DuplicateRoute``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from wren.errors import ConfigurationError, DuplicateRoute
from wren.routing.route import PathSegment, Route, RouteMatch


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"            -> [PathSegment("users")]
        "/sample/:path"     -> [PathSegment("sample"), PathSegment(":path", is_param=True, ...)]
        "/users/{id}"       -> [PathSegment("users"), PathSegment("{id}", is_param=True, ...)]
    """
    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith(":"):
            name = part[1:]
        elif part.startswith("{") and part.endswith("}"):
            name = part[1:-1]
        else:
            segments.append(PathSegment(value=part))
            continue
        if not name.isidentifier():
            msg = f"Invalid path parameter {part!r} in route {path!r}: name must be an identifier."
            raise ConfigurationError(msg)
        segments.append(PathSegment(value=part, is_param=True, param_name=name))
    return segments


@dataclass(slots=True)
class _TrieNode:
    """A node in the route trie. Mutable during compilation only."""

    # Literal segment children: "users" -> node
    children: dict[str, _TrieNode] = field(default_factory=dict)
    # Single variable child (variable names are kept per route at the terminal node)
    param_child: _TrieNode | None = None
    # Routes terminating at this node, keyed by HTTP method, with the
    # route's own variable names in path order
    routes_by_method: dict[str, tuple[Route, tuple[str, ...]]] = field(default_factory=dict)


class Router:
    """Compiled router with trie-based path matching.

    Usage::

        router = Router()
        router.add(Route("/", ping, frozenset({"GET"})))
        router.add(Route("/sample/:path", sample, frozenset({"POST"})))
        router.compile()
        match = router.resolve("POST", "/sample/42")
    """

    __slots__ = ("_compiled", "_root", "_routes")

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._routes: list[Route] = []
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route. Must be called before compile().

        Raises ``DuplicateRoute`` if any of the route's methods is already
        registered for an equivalent pattern.
        """
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        segments = parse_path(route.path)
        names = tuple(seg.param_name or "" for seg in segments if seg.is_param)
        if len(set(names)) != len(names):
            msg = f"Route {route.path!r} repeats a path parameter name."
            raise ConfigurationError(msg)
        node = self._root
        for seg in segments:
            if seg.is_param:
                if node.param_child is None:
                    node.param_child = _TrieNode()
                node = node.param_child
            else:
                node = node.children.setdefault(seg.value, _TrieNode())

        for method in route.methods:
            existing = node.routes_by_method.get(method)
            if existing is not None:
                raise DuplicateRoute(method, route.path, existing[0].path)

        for method in route.methods:
            node.routes_by_method[method] = (route, names)
        self._routes.append(route)

    @property
    def routes(self) -> list[Route]:
        """All registered routes, in registration order."""
        return list(self._routes)

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def resolve(self, method: str, path: str) -> RouteMatch | None:
        """Match a request method and path against the route table.

        Returns a ``RouteMatch`` with the captured path parameters as raw
        strings, or ``None`` when nothing matches. Converting parameters to
        the handler's declared types is the caller's job.
        """
        parts = [p for p in path.strip("/").split("/") if p]
        found = self._match_node(self._root, method, parts, 0, [])
        if found is None:
            return None
        (route, names), values = found
        return RouteMatch(route=route, path_params=dict(zip(names, values, strict=True)))

    def _match_node(
        self,
        node: _TrieNode,
        method: str,
        parts: list[str],
        index: int,
        values: list[str],
    ) -> tuple[tuple[Route, tuple[str, ...]], list[str]] | None:
        """Recursively match path parts against the trie."""
        if index == len(parts):
            entry = node.routes_by_method.get(method)
            if entry is None:
                return None
            return entry, values

        part = parts[index]

        # 1. Literal child first (exact match)
        child = node.children.get(part)
        if child is not None:
            result = self._match_node(child, method, parts, index + 1, values)
            if result is not None:
                return result

        # 2. Variable child
        if node.param_child is not None:
            return self._match_node(node.param_child, method, parts, index + 1, [*values, part])

        return None

"""Route and RouteMatch frozen dataclasses."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from wren.extraction import HandlerSignature


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Literal:   ``/users``   (is_param=False)
    Variable:  ``/:id``     (is_param=True, param_name="id")
    Also accepted: ``/{id}``
    """

    value: str
    is_param: bool = False
    param_name: str | None = None


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Created during app setup, compiled into the router at freeze time.
    ``tag`` and ``summary`` feed the API document; routes with
    ``include_in_schema=False`` (the documentation routes themselves)
    are left out of it. ``signature`` is the analysed handler signature,
    attached when the app freezes.
    """

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    name: str | None = None
    tag: str | None = None
    summary: str | None = None
    include_in_schema: bool = True
    signature: HandlerSignature | None = None


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]

"""API documentation: OpenAPI document and Swagger UI page."""

from __future__ import annotations

from typing import TYPE_CHECKING

from wren.extraction import analyze_handler
from wren.http.response import HTML_CONTENT_TYPE, Response
from wren.openapi.document import build_document, openapi_path
from wren.openapi.swagger import render_swagger_ui
from wren.routing.route import Route

if TYPE_CHECKING:
    from wren.app import App

__all__ = ["build_document", "docs_routes", "openapi_path", "render_swagger_ui"]


def docs_routes(app: App) -> list[Route]:
    """Routes serving the API document and the Swagger UI page for *app*.

    Both are excluded from the document itself.
    """
    config = app.config

    def openapi_json() -> Response:
        return Response.json_body(app.openapi)

    def swagger_ui() -> Response:
        page = render_swagger_ui(title=config.title, openapi_url=config.openapi_path)
        return Response(body=page, content_type=HTML_CONTENT_TYPE)

    return [
        Route(
            path=config.openapi_path,
            handler=openapi_json,
            methods=frozenset({"GET"}),
            name="openapi",
            include_in_schema=False,
            signature=analyze_handler(openapi_json, ()),
        ),
        Route(
            path=config.docs_path,
            handler=swagger_ui,
            methods=frozenset({"GET"}),
            name="swagger_ui",
            include_in_schema=False,
            signature=analyze_handler(swagger_ui, ()),
        ),
    ]

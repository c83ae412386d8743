"""Swagger UI page rendered with kida."""

from functools import cache

from kida import Environment, PackageLoader

SWAGGER_TEMPLATE = "swagger_ui.html"


@cache
def _environment() -> Environment:
    return Environment(loader=PackageLoader("wren.openapi", "templates"), autoescape=True)


def render_swagger_ui(*, title: str, openapi_url: str) -> str:
    """Render the Swagger UI page that loads the document at *openapi_url*."""
    template = _environment().get_template(SWAGGER_TEMPLATE)
    return template.render({"title": title, "openapi_url": openapi_url})

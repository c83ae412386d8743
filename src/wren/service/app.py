"""The sample service.

``GET /`` answers ``pong``; ``/login`` and ``/profile`` are stubs that
always succeed; ``POST /sample/:path`` echoes its path, query and body.
Every route sits behind the CORS and access-log middleware.
"""

from wren.app import App
from wren.config import AppConfig
from wren.middleware import AccessLog, CORSConfig, CORSMiddleware
from wren.service.models import RequestData, ResponseData

TAG = "Sample"

CONFIG = AppConfig(
    title="wren-sample",
    version="0.0.1",
    description="This is a wren-sample API document.",
    contact=(
        ("name", "Myxogastria0808"),
        ("email", "r.rstudio.c@gmail.com"),
        ("url", "https://yukiosada.work"),
    ),
    license_name="WTFPL",
    license_url="http://www.wtfpl.net",
    tags=((TAG, "Sample API"),),
)


def create_app(config: AppConfig = CONFIG) -> App:
    """Build the sample service app."""
    app = App(config)

    # Outermost first: preflights answered by CORS still reach the access log
    app.add_middleware(AccessLog())
    app.add_middleware(CORSMiddleware(CORSConfig.permissive()))

    @app.route("/", tag=TAG)
    def ping() -> str:
        """Liveness check."""
        return "pong"

    @app.route("/login", methods=["GET", "POST"], tag=TAG)
    def login() -> None:
        """Log in (always succeeds)."""

    @app.route("/profile", methods=["GET", "POST"], tag=TAG)
    def profile() -> None:
        """Show the profile (always succeeds)."""

    @app.route("/sample/:path", methods=["POST"], tag=TAG)
    def sample(path: int, body: RequestData, query: str = "") -> ResponseData:
        """Echo the path segment, query parameter and JSON body."""
        return ResponseData(
            message=(
                f"path: {path}, query: {query}, "
                f"body: {{ name: {body.name}, message: {body.message} }}"
            )
        )

    return app


app = create_app()

"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass

MiB = 1024 * 1024


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(port=3000, max_body_size=8 * MiB)
    """

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    debug: bool = False
    workers: int = 0  # 0 = auto-detect from CPU count (production mode only)

    # Reload (development mode, requires debug=True)
    reload_include: tuple[str, ...] = ()
    reload_dirs: tuple[str, ...] = ()

    # Limits
    max_body_size: int = 100 * MiB

    # Logging (applied by the pounce server)
    log_level: str = "debug"
    log_format: str = "text"

    # API documentation
    docs_enabled: bool = True
    openapi_path: str = "/api-docs/openapi.json"
    docs_path: str = "/swagger-ui"
    title: str = "wren"
    version: str = "0.1.0"
    description: str = ""
    contact: tuple[tuple[str, str], ...] = ()  # (("name", ...), ("email", ...), ("url", ...))
    license_name: str | None = None
    license_url: str | None = None
    tags: tuple[tuple[str, str], ...] = ()  # ((name, description), ...)

    def server_url(self) -> str:
        """Base URL advertised in the API document."""
        return f"http://{self.host}:{self.port}"

"""Sample service built on wren.

Run it with ``wren run`` (the default app) or ``python -m wren.service``.
"""

from wren.service.app import app, create_app
from wren.service.models import RequestData, ResponseData

__all__ = ["RequestData", "ResponseData", "app", "create_app"]

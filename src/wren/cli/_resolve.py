"""App import resolution: ``"module:attribute"`` strings to App instances.

Shared by ``wren run`` and ``wren routes``.
"""

import importlib

from wren.app import App


def resolve_app(import_string: str) -> App:
    """Resolve an import string to a wren App instance.

    Accepts ``"module:attribute"`` format.  When the attribute portion
    is omitted, defaults to ``"app"`` (e.g. ``"myapp"`` resolves to
    ``myapp.app``).

    Supports factory functions: if the resolved object is callable and
    not an App instance, it is called and must return an App.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a wren ``App`` or factory.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "app"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, App):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, App):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a wren.App instance"
        raise TypeError(msg)

    return obj

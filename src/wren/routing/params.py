"""Path and query parameter conversion.

The router captures raw strings. Conversion to the handler's declared
type happens here, driven by the parameter annotation, so that a
malformed value is a ``BadRequest`` rather than a missing route.
"""

import re
from collections.abc import Callable
from typing import Any

# Stricter than int() and float(), which accept surrounding whitespace and underscores
_INT = re.compile(r"-?[0-9]+")
_FLOAT = re.compile(r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][-+]?[0-9]+)?")

_TRUE = frozenset({"true", "1", "yes", "on"})
_FALSE = frozenset({"false", "0", "no", "off"})


def _to_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    msg = f"invalid boolean literal: {value!r}"
    raise ValueError(msg)


def _to_int(value: str) -> int:
    if _INT.fullmatch(value) is None:
        msg = f"invalid integer literal: {value!r}"
        raise ValueError(msg)
    return int(value)


def _to_float(value: str) -> float:
    if _FLOAT.fullmatch(value) is None:
        msg = f"invalid number literal: {value!r}"
        raise ValueError(msg)
    return float(value)


# annotation -> converter for every supported scalar parameter type
CONVERTERS: dict[Any, Callable[[str], Any]] = {
    str: str,
    int: _to_int,
    float: _to_float,
    bool: _to_bool,
}


def is_scalar(annotation: Any) -> bool:
    """True if *annotation* has a registered converter."""
    return annotation in CONVERTERS


def convert_param(value: str, annotation: Any) -> Any:
    """Convert a captured parameter string to the annotated type.

    Unannotated parameters stay strings. Raises ``ValueError`` if the
    string cannot be converted and ``TypeError`` for unsupported
    annotations.
    """
    if annotation is Any:
        return value
    try:
        converter = CONVERTERS[annotation]
    except KeyError:
        msg = f"unsupported parameter type: {annotation!r}"
        raise TypeError(msg) from None
    return converter(value)

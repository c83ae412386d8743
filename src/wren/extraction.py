"""Handler signature analysis and typed extraction.

Each route handler declares what it needs through its signature:

- a parameter named ``request`` (or annotated ``Request``) receives the
  request itself;
- a parameter whose name matches a path variable receives that segment,
  converted to the annotated type;
- a parameter annotated with a dataclass receives the JSON body decoded
  into that dataclass;
- any other ``str`` / ``int`` / ``float`` / ``bool`` parameter is a query
  parameter of the same name. A default makes it optional.

The signature is analysed once per route when the app freezes. Decoding
failures raise ``BadRequest``, never a routing failure.

Example::

    @dataclass
    class RequestData:
        name: str
        message: str

    @app.route("/sample/:path", methods=["POST"])
    def sample(path: int, body: RequestData, query: str = "") -> ResponseData:
        ...
"""

from __future__ import annotations

import dataclasses
import inspect
import json
import types
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Union, get_args, get_origin, get_type_hints

from wren.errors import BadRequest, ConfigurationError
from wren.http.request import Request
from wren.routing.params import convert_param, is_scalar

_EMPTY = inspect.Parameter.empty


class ParamSource(StrEnum):
    """Where a handler parameter's value comes from."""

    REQUEST = "request"
    PATH = "path"
    QUERY = "query"
    BODY = "body"


@dataclass(frozen=True, slots=True)
class HandlerParam:
    """One analysed handler parameter."""

    name: str
    source: ParamSource
    annotation: Any = Any
    default: Any = _EMPTY
    nullable: bool = False

    @property
    def required(self) -> bool:
        return self.default is _EMPTY and not self.nullable


@dataclass(frozen=True, slots=True)
class HandlerSignature:
    """The declared inputs and output of a route handler."""

    params: tuple[HandlerParam, ...]
    return_annotation: Any = None

    def of(self, source: ParamSource) -> tuple[HandlerParam, ...]:
        return tuple(p for p in self.params if p.source is source)

    @property
    def body(self) -> HandlerParam | None:
        body_params = self.of(ParamSource.BODY)
        return body_params[0] if body_params else None

    @property
    def decodes_input(self) -> bool:
        """True if any parameter comes from the path, query, or body."""
        return any(p.source is not ParamSource.REQUEST for p in self.params)


# Framework subpackages whose dataclasses (``Request``, ``Response``,
# configuration) are never decoded from request data. Application code
# living under ``wren.`` (such as ``wren.service``) is not excluded.
_FRAMEWORK_MODULES = frozenset(
    {
        "wren._internal",
        "wren.app",
        "wren.config",
        "wren.errors",
        "wren.extraction",
        "wren.http",
        "wren.middleware",
        "wren.openapi",
        "wren.routing",
        "wren.server",
        "wren.testing",
    }
)


def is_extractable_dataclass(annotation: Any) -> bool:
    """Return True if *annotation* is an application dataclass type.

    Excludes wren's own framework dataclasses (``Request``, ``Response``,
    ``AppConfig``, etc.) which are never decoded from request data.
    """
    if not isinstance(annotation, type) or not dataclasses.is_dataclass(annotation):
        return False
    module = getattr(annotation, "__module__", "") or ""
    return ".".join(module.split(".")[:2]) not in _FRAMEWORK_MODULES


def analyze_handler(handler: Callable[..., Any], path_params: tuple[str, ...]) -> HandlerSignature:
    """Classify every parameter of *handler*.

    Raises ``ConfigurationError`` for signatures that cannot be served:
    a path variable with no matching parameter, more than one body
    parameter, or a query parameter of an unsupported type.
    """
    sig = inspect.signature(handler, eval_str=True)
    params: list[HandlerParam] = []

    for name, param in sig.parameters.items():
        annotation = Any if param.annotation is _EMPTY else param.annotation
        nullable = _is_optional(annotation)
        if nullable:
            annotation = _unwrap_optional(annotation)

        if name == "request" or annotation is Request:
            params.append(HandlerParam(name, ParamSource.REQUEST, Request))
        elif name in path_params:
            if annotation is not Any and not is_scalar(annotation):
                msg = f"Path parameter {name!r} of {handler.__qualname__} has unsupported type {annotation!r}."
                raise ConfigurationError(msg)
            params.append(HandlerParam(name, ParamSource.PATH, annotation))
        elif is_extractable_dataclass(annotation):
            params.append(
                HandlerParam(name, ParamSource.BODY, annotation, param.default, nullable)
            )
        elif annotation is Any or is_scalar(annotation):
            params.append(
                HandlerParam(name, ParamSource.QUERY, annotation, param.default, nullable)
            )
        else:
            msg = f"Parameter {name!r} of {handler.__qualname__} has unsupported type {annotation!r}."
            raise ConfigurationError(msg)

    declared = {p.name for p in params if p.source is ParamSource.PATH}
    missing = [n for n in path_params if n not in declared]
    if missing:
        msg = f"{handler.__qualname__} does not accept path parameter(s) {', '.join(missing)}."
        raise ConfigurationError(msg)
    if len([p for p in params if p.source is ParamSource.BODY]) > 1:
        msg = f"{handler.__qualname__} declares more than one body parameter."
        raise ConfigurationError(msg)

    returns = None if sig.return_annotation is _EMPTY else sig.return_annotation
    return HandlerSignature(params=tuple(params), return_annotation=returns)


def build_kwargs(signature: HandlerSignature, request: Request) -> dict[str, Any]:
    """Decode the request into keyword arguments for the handler.

    Raises ``BadRequest`` when a path, query, or body value is missing
    or malformed.
    """
    kwargs: dict[str, Any] = {}
    for param in signature.params:
        match param.source:
            case ParamSource.REQUEST:
                kwargs[param.name] = request
            case ParamSource.PATH:
                raw = request.path_params[param.name]
                kwargs[param.name] = _convert(raw, param, "path parameter")
            case ParamSource.QUERY:
                raw_value = request.query.get(param.name)
                if raw_value is None:
                    if param.default is not _EMPTY:
                        kwargs[param.name] = param.default
                    elif param.nullable:
                        kwargs[param.name] = None
                    else:
                        raise BadRequest(f"Missing required query parameter {param.name!r}")
                else:
                    kwargs[param.name] = _convert(raw_value, param, "query parameter")
            case ParamSource.BODY:
                kwargs[param.name] = decode_body(param.annotation, request.body)
    return kwargs


def _convert(raw: str, param: HandlerParam, where: str) -> Any:
    try:
        return convert_param(raw, param.annotation)
    except ValueError:
        type_name = getattr(param.annotation, "__name__", str(param.annotation))
        raise BadRequest(f"Invalid {where} {param.name!r}: expected {type_name}") from None


def decode_body[T](cls: type[T], body: bytes) -> T:
    """Decode a JSON body into an instance of the dataclass *cls*."""
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError):
        raise BadRequest("Request body is not valid JSON") from None
    if not isinstance(data, dict):
        raise BadRequest("Request body must be a JSON object")
    return extract_dataclass(cls, data)


def extract_dataclass[T](cls: type[T], data: Mapping[str, Any], *, prefix: str = "") -> T:
    """Create a dataclass instance from decoded JSON, checking field types.

    Unknown keys are ignored. Missing fields fall back to the field's
    default; a missing field without a default, or a value of the wrong
    JSON type, raises ``BadRequest``.
    """
    hints = get_type_hints(cls)
    kwargs: dict[str, Any] = {}

    for f in dataclasses.fields(cls):  # type: ignore[arg-type]
        if not f.init:
            continue
        label = f"{prefix}{f.name}"
        if f.name not in data:
            if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
                raise BadRequest(f"Missing required field {label!r}")
            continue
        kwargs[f.name] = _check_value(data[f.name], hints.get(f.name, Any), label)

    return cls(**kwargs)


_JSON_TYPE_NAMES: dict[type, str] = {
    str: "a string",
    int: "an integer",
    float: "a number",
    bool: "a boolean",
    list: "an array",
    dict: "an object",
}


def _check_value(value: Any, annotation: Any, label: str) -> Any:
    """Validate one decoded JSON value against a field annotation."""
    if _is_optional(annotation):
        if value is None:
            return None
        annotation = _unwrap_optional(annotation)

    if annotation is Any:
        return value

    if is_extractable_dataclass(annotation):
        if not isinstance(value, dict):
            raise BadRequest(f"Field {label!r} must be an object")
        return extract_dataclass(annotation, value, prefix=f"{label}.")

    origin = get_origin(annotation) or annotation
    ok: bool
    if origin is bool:
        ok = isinstance(value, bool)
    elif origin is int:
        ok = isinstance(value, int) and not isinstance(value, bool)
    elif origin is float:
        ok = isinstance(value, (int, float)) and not isinstance(value, bool)
    elif origin in (str, list, dict):
        ok = isinstance(value, origin)
    else:
        return value

    if not ok:
        raise BadRequest(f"Field {label!r} must be {_JSON_TYPE_NAMES[origin]}")
    if origin is float:
        return float(value)
    return value


def _is_optional(annotation: Any) -> bool:
    """Check if an annotation is X | None."""
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        return type(None) in get_args(annotation)
    return False


def _unwrap_optional(annotation: Any) -> Any:
    """Extract the non-None type from X | None."""
    non_none = [a for a in get_args(annotation) if a is not type(None)]
    if len(non_none) == 1:
        return non_none[0]
    return Any

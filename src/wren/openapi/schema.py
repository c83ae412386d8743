"""Python type to JSON Schema conversion for the API document.

Dataclasses become named components under ``#/components/schemas`` and
are referenced with ``$ref``; scalars, lists and dicts are inlined.
"""

import dataclasses
import types
from typing import Any, Union, get_args, get_origin, get_type_hints

# Python type → JSON Schema type
_TYPE_MAP: dict[type, str] = {
    str: "string",
    int: "integer",
    float: "number",
    bool: "boolean",
}


def type_to_schema(annotation: Any, components: dict[str, Any]) -> dict[str, Any]:
    """Convert a Python type annotation to a JSON Schema fragment.

    Dataclass types are registered in *components* (keyed by class name)
    and returned as a ``$ref``.
    """
    if annotation in _TYPE_MAP:
        return {"type": _TYPE_MAP[annotation]}

    if isinstance(annotation, type) and dataclasses.is_dataclass(annotation):
        return dataclass_to_schema(annotation, components)

    if _is_optional(annotation):
        inner = type_to_schema(_unwrap_optional(annotation), components)
        return {"anyOf": [inner, {"type": "null"}]}

    origin = get_origin(annotation)
    if origin is list:
        args = get_args(annotation)
        if args:
            return {"type": "array", "items": type_to_schema(args[0], components)}
        return {"type": "array"}
    if annotation is list:
        return {"type": "array"}

    if origin is dict or annotation is dict:
        return {"type": "object"}

    # Unannotated or unsupported: accept anything
    return {}


def dataclass_to_schema(cls: type, components: dict[str, Any]) -> dict[str, Any]:
    """Register *cls* as a component schema and return a reference to it.

    Fields without a default are required.
    """
    name = cls.__name__
    ref = {"$ref": f"#/components/schemas/{name}"}
    if name in components:
        return ref

    # Placeholder guards against self-referencing dataclasses
    components[name] = {}
    hints = get_type_hints(cls)
    properties: dict[str, Any] = {}
    required: list[str] = []

    for field in dataclasses.fields(cls):
        properties[field.name] = type_to_schema(hints.get(field.name, Any), components)
        if field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING:
            required.append(field.name)

    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    components[name] = schema
    return ref


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

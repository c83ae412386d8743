"""OpenAPI 3.1 document generation.

The document is derived from the frozen route table: one operation per
(route, method), with parameters and the request body read from the
analysed handler signature.
"""

from collections.abc import Iterable
from typing import Any

from wren.config import AppConfig
from wren.extraction import HandlerSignature, ParamSource, is_extractable_dataclass
from wren.openapi.schema import type_to_schema
from wren.routing.route import Route
from wren.routing.router import parse_path

OPENAPI_VERSION = "3.1.0"

ERROR_SCHEMA_NAME = "ResponseError"
ERROR_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {"message": {"type": "string"}},
    "required": ["message"],
}

_ERROR_REF = {"$ref": f"#/components/schemas/{ERROR_SCHEMA_NAME}"}


def openapi_path(pattern: str) -> str:
    """Rewrite a route pattern in OpenAPI form (``/a/:b`` → ``/a/{b}``)."""
    parts = [
        f"{{{seg.param_name}}}" if seg.is_param else seg.value for seg in parse_path(pattern)
    ]
    return "/" + "/".join(parts)


def build_document(routes: Iterable[Route], config: AppConfig) -> dict[str, Any]:
    """Build the OpenAPI document for *routes*.

    Routes with ``include_in_schema=False`` are skipped.
    """
    components: dict[str, Any] = {ERROR_SCHEMA_NAME: ERROR_SCHEMA}
    paths: dict[str, dict[str, Any]] = {}

    for route in routes:
        if not route.include_in_schema:
            continue
        item = paths.setdefault(openapi_path(route.path), {})
        for method in sorted(route.methods):
            item[method.lower()] = _operation(route, method, components)

    document: dict[str, Any] = {
        "openapi": OPENAPI_VERSION,
        "info": _info(config),
        "servers": [{"url": config.server_url()}],
        "paths": paths,
        "components": {"schemas": components},
    }
    if config.tags:
        document["tags"] = [{"name": name, "description": desc} for name, desc in config.tags]
    return document


def _info(config: AppConfig) -> dict[str, Any]:
    info: dict[str, Any] = {"title": config.title, "version": config.version}
    if config.description:
        info["description"] = config.description
    if config.contact:
        info["contact"] = dict(config.contact)
    if config.license_name:
        license_: dict[str, str] = {"name": config.license_name}
        if config.license_url:
            license_["url"] = config.license_url
        info["license"] = license_
    return info


def _operation(route: Route, method: str, components: dict[str, Any]) -> dict[str, Any]:
    signature = route.signature or HandlerSignature(params=())
    handler_name = getattr(route.handler, "__name__", "handler")
    operation_id = route.name or handler_name
    if len(route.methods) > 1:
        operation_id = f"{operation_id}_{method.lower()}"

    operation: dict[str, Any] = {"operationId": operation_id}
    if route.tag:
        operation["tags"] = [route.tag]
    summary = route.summary or _first_line(route.handler.__doc__)
    if summary:
        operation["summary"] = summary

    parameters = [
        {
            "name": p.name,
            "in": "path" if p.source is ParamSource.PATH else "query",
            "required": p.source is ParamSource.PATH or p.required,
            "schema": type_to_schema(p.annotation, components),
        }
        for p in signature.params
        if p.source in (ParamSource.PATH, ParamSource.QUERY)
    ]
    if parameters:
        operation["parameters"] = parameters

    body = signature.body
    if body is not None:
        operation["requestBody"] = {
            "required": body.required,
            "content": {"application/json": {"schema": type_to_schema(body.annotation, components)}},
        }

    ok: dict[str, Any] = {"description": "OK"}
    if is_extractable_dataclass(signature.return_annotation):
        ok["content"] = {
            "application/json": {
                "schema": type_to_schema(signature.return_annotation, components)
            }
        }

    responses: dict[str, Any] = {"200": ok}
    if signature.decodes_input:
        responses["400"] = _error_response("Bad Request")
    responses["500"] = _error_response("Internal Server Error")
    operation["responses"] = responses
    return operation


def _error_response(description: str) -> dict[str, Any]:
    return {
        "description": description,
        "content": {"application/json": {"schema": _ERROR_REF}},
    }


def _first_line(doc: str | None) -> str | None:
    if not doc:
        return None
    for line in doc.strip().splitlines():
        if line.strip():
            return line.strip()
    return None

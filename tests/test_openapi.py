"""Tests for wren.openapi — document generation and the Swagger UI page."""

from dataclasses import dataclass, field

from wren.app import App
from wren.config import AppConfig
from wren.openapi.document import build_document, openapi_path
from wren.openapi.schema import dataclass_to_schema, type_to_schema
from wren.testing import TestClient


@dataclass(frozen=True, slots=True)
class Note:
    title: str
    body: str = ""
    tags: list[str] = field(default_factory=list)
    rating: float | None = None


@dataclass(frozen=True, slots=True)
class Saved:
    id: int
    note: Note


def _make_app() -> App:
    app = App(
        AppConfig(
            title="notes",
            version="1.2.3",
            description="Notes API.",
            contact=(("name", "someone"),),
            license_name="MIT",
            license_url="https://opensource.org/licenses/MIT",
            tags=(("Notes", "Note API"),),
        )
    )

    @app.route("/", tag="Notes")
    def ping() -> str:
        """Liveness check.

        Longer description that is not part of the summary.
        """
        return "pong"

    @app.route("/notes/:id", methods=["POST"], tag="Notes", summary="Save a note")
    def save(id: int, note: Note, draft: bool = False) -> Saved:
        return Saved(id=id, note=note)

    return app


class TestSchema:
    def test_scalars(self) -> None:
        assert type_to_schema(int, {}) == {"type": "integer"}
        assert type_to_schema(bool, {}) == {"type": "boolean"}

    def test_list(self) -> None:
        assert type_to_schema(list[str], {}) == {"type": "array", "items": {"type": "string"}}

    def test_optional(self) -> None:
        assert type_to_schema(float | None, {}) == {
            "anyOf": [{"type": "number"}, {"type": "null"}]
        }

    def test_dataclass_component(self) -> None:
        components: dict = {}
        ref = dataclass_to_schema(Saved, components)
        assert ref == {"$ref": "#/components/schemas/Saved"}
        assert components["Saved"]["required"] == ["id", "note"]
        assert components["Saved"]["properties"]["note"] == {"$ref": "#/components/schemas/Note"}
        assert components["Note"]["required"] == ["title"]


class TestOpenAPIPath:
    def test_colon_param(self) -> None:
        assert openapi_path("/sample/:path") == "/sample/{path}"

    def test_root(self) -> None:
        assert openapi_path("/") == "/"


class TestDocument:
    def test_info(self) -> None:
        doc = _make_app().openapi
        assert doc["openapi"] == "3.1.0"
        assert doc["info"] == {
            "title": "notes",
            "version": "1.2.3",
            "description": "Notes API.",
            "contact": {"name": "someone"},
            "license": {"name": "MIT", "url": "https://opensource.org/licenses/MIT"},
        }
        assert doc["servers"] == [{"url": "http://0.0.0.0:5000"}]
        assert doc["tags"] == [{"name": "Notes", "description": "Note API"}]

    def test_docs_routes_excluded(self) -> None:
        assert set(_make_app().openapi["paths"]) == {"/", "/notes/{id}"}

    def test_summary_from_docstring(self) -> None:
        op = _make_app().openapi["paths"]["/"]["get"]
        assert op["summary"] == "Liveness check."
        assert op["tags"] == ["Notes"]
        assert "parameters" not in op
        assert set(op["responses"]) == {"200", "500"}

    def test_operation_with_inputs(self) -> None:
        op = _make_app().openapi["paths"]["/notes/{id}"]["post"]
        assert op["summary"] == "Save a note"
        assert op["parameters"] == [
            {"name": "id", "in": "path", "required": True, "schema": {"type": "integer"}},
            {"name": "draft", "in": "query", "required": False, "schema": {"type": "boolean"}},
        ]
        assert op["requestBody"]["content"]["application/json"]["schema"] == {
            "$ref": "#/components/schemas/Note"
        }
        assert op["responses"]["200"]["content"]["application/json"]["schema"] == {
            "$ref": "#/components/schemas/Saved"
        }
        assert set(op["responses"]) == {"200", "400", "500"}

    def test_error_schema(self) -> None:
        doc = _make_app().openapi
        assert doc["components"]["schemas"]["ResponseError"]["properties"] == {
            "message": {"type": "string"}
        }
        error = doc["paths"]["/"]["get"]["responses"]["500"]
        assert error["content"]["application/json"]["schema"] == {
            "$ref": "#/components/schemas/ResponseError"
        }

    def test_operation_ids_unique_per_method(self) -> None:
        app = App()

        @app.route("/login", methods=["GET", "POST"])
        def login() -> None: ...

        item = app.openapi["paths"]["/login"]
        assert item["get"]["operationId"] == "login_get"
        assert item["post"]["operationId"] == "login_post"

    def test_build_document_directly(self) -> None:
        doc = build_document([], AppConfig())
        assert doc["paths"] == {}
        assert "ResponseError" in doc["components"]["schemas"]


class TestDocsEndpoints:
    async def test_openapi_json(self) -> None:
        async with TestClient(_make_app()) as client:
            response = await client.get("/api-docs/openapi.json")
        assert response.status == 200
        assert response.content_type == "application/json"
        assert response.json["info"]["title"] == "notes"

    async def test_swagger_ui(self) -> None:
        async with TestClient(_make_app()) as client:
            response = await client.get("/swagger-ui")
        assert response.status == 200
        assert response.content_type.startswith("text/html")
        assert "/api-docs/openapi.json" in response.text
        assert "SwaggerUIBundle" in response.text
        assert "notes" in response.text

    async def test_docs_disabled(self) -> None:
        app = App(AppConfig(docs_enabled=False))
        async with TestClient(app) as client:
            assert (await client.get("/swagger-ui")).status == 404

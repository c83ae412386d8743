"""Tests for the bundled sample service."""

import logging

import pytest

from wren.extraction import ParamSource
from wren.service import RequestData, ResponseData, create_app
from wren.testing import TestClient

ORIGIN = {"Origin": "https://client.example"}


@pytest.fixture
async def client():
    async with TestClient(create_app()) as c:
        yield c


class TestPing:
    async def test_pong(self, client: TestClient) -> None:
        response = await client.get("/")
        assert response.status == 200
        assert response.text == "pong"
        assert response.content_type.startswith("text/plain")

    async def test_idempotent(self, client: TestClient) -> None:
        first = await client.get("/")
        second = await client.get("/")
        assert (first.status, first.text) == (second.status, second.text)

    async def test_post_is_not_routed(self, client: TestClient) -> None:
        response = await client.post("/")
        assert response.status == 404
        assert "message" in response.json


class TestStubs:
    @pytest.mark.parametrize("path", ["/login", "/profile"])
    @pytest.mark.parametrize("method", ["GET", "POST"])
    async def test_empty_200(self, client: TestClient, path: str, method: str) -> None:
        response = await client.request(method, path)
        assert response.status == 200
        assert response.body_bytes == b""


class TestSample:
    async def test_echo(self, client: TestClient) -> None:
        response = await client.post(
            "/sample/42?query=Q", json={"name": "A", "message": "B"}
        )
        assert response.status == 200
        assert response.content_type == "application/json"
        assert response.json == {"message": "path: 42, query: Q, body: { name: A, message: B }"}

    async def test_missing_query_is_empty(self, client: TestClient) -> None:
        response = await client.post("/sample/7", json={"name": "x", "message": "y"})
        assert response.json == {"message": "path: 7, query: , body: { name: x, message: y }"}

    async def test_non_integer_path(self, client: TestClient) -> None:
        response = await client.post("/sample/abc", json={"name": "A", "message": "B"})
        assert response.status == 400
        assert "message" in response.json

    async def test_missing_field(self, client: TestClient) -> None:
        response = await client.post("/sample/1", json={"name": "A"})
        assert response.status == 400
        assert response.json == {"message": "Missing required field 'message'"}

    async def test_invalid_json(self, client: TestClient) -> None:
        response = await client.post("/sample/1", body=b"{not json")
        assert response.status == 400

    async def test_loose_integer_path_is_rejected(self, client: TestClient) -> None:
        for path in ("/sample/4_2", "/sample/+42"):
            response = await client.post(path, json={"name": "A", "message": "B"})
            assert response.status == 400, path

    def test_body_decodes_into_request_data(self) -> None:
        app = create_app()
        route = next(r for r in app.routes if r.path == "/sample/:path")
        body = route.signature.body
        assert body is not None
        assert body.source is ParamSource.BODY
        assert body.annotation is RequestData
        assert route.signature.return_annotation is ResponseData

    async def test_get_is_not_routed(self, client: TestClient) -> None:
        assert (await client.get("/sample/1")).status == 404


class TestServicePolicy:
    async def test_cors_on_every_response(self, client: TestClient) -> None:
        for response in (
            await client.get("/", headers=ORIGIN),
            await client.get("/missing", headers=ORIGIN),
        ):
            assert ("access-control-allow-origin", "*") in response.headers
            assert ("access-control-expose-headers", "Content-Disposition") in response.headers

    async def test_preflight(self, client: TestClient) -> None:
        response = await client.options(
            "/sample/1",
            headers={**ORIGIN, "Access-Control-Request-Method": "POST"},
        )
        assert response.status == 204
        assert ("access-control-allow-headers", "Authorization, Content-Type") in response.headers

    async def test_body_limit_is_100_mib(self, client: TestClient) -> None:
        response = await client.request(
            "POST",
            "/sample/1",
            headers={"content-length": str(100 * 1024 * 1024 + 1)},
            body=b"{}",
        )
        assert response.status == 413

    async def test_oversized_body_carries_cors(self, client: TestClient) -> None:
        response = await client.request(
            "POST",
            "/sample/1",
            headers={**ORIGIN, "content-length": str(100 * 1024 * 1024 + 1)},
            body=b"{}",
        )
        assert response.status == 413
        assert ("access-control-allow-origin", "*") in response.headers
        assert "message" in response.json

    async def test_preflight_is_logged(
        self, client: TestClient, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="wren.access"):
            response = await client.options(
                "/sample/1",
                headers={**ORIGIN, "Access-Control-Request-Method": "POST"},
            )
        assert response.status == 204
        messages = [r.getMessage() for r in caplog.records if r.name == "wren.access"]
        assert any(m.startswith("--> OPTIONS") for m in messages)
        assert any(m.startswith("<-- 204 OPTIONS") for m in messages)

    async def test_listener_defaults(self) -> None:
        app = create_app()
        assert (app.config.host, app.config.port) == ("0.0.0.0", 5000)


class TestServiceDocs:
    async def test_document(self, client: TestClient) -> None:
        doc = (await client.get("/api-docs/openapi.json")).json
        assert doc["info"]["title"] == "wren-sample"
        assert doc["info"]["license"]["name"] == "WTFPL"
        assert doc["tags"] == [{"name": "Sample", "description": "Sample API"}]
        assert set(doc["paths"]) == {"/", "/login", "/profile", "/sample/{path}"}
        sample = doc["paths"]["/sample/{path}"]["post"]
        assert sample["tags"] == ["Sample"]
        assert sample["requestBody"]["content"]["application/json"]["schema"] == {
            "$ref": "#/components/schemas/RequestData"
        }
        assert set(doc["components"]["schemas"]) == {"ResponseError", "RequestData", "ResponseData"}

    def test_models(self) -> None:
        assert RequestData(name="A", message="B").message == "B"
        assert ResponseData(message="m").message == "m"

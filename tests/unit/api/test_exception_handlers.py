"""Unit tests for exception handlers."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from api.exception_handlers import setup_exception_handlers
from core.exceptions import (
    ConcurrentUpdateError,
    EmptyCandidateSetError,
    InvalidCandidateError,
    SessionInactiveError,
    SessionNotFoundError,
    UpstreamUnavailableError,
)


def _create_test_app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)
    return app


async def _raise_through(exc: Exception):
    app = _create_test_app()

    @app.get("/raise")
    async def _() -> None:
        raise exc

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        return await c.get("/raise")


class TestExceptionHandlers:
    @pytest.mark.asyncio
    async def test_app_exception_returns_error_code_and_message(self) -> None:
        response = await _raise_through(SessionNotFoundError("some-id"))

        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "SESSION_NOT_FOUND"
        assert "some-id" in body["message"]
        assert body["details"]["session_id"] == "some-id"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("exc", "status_code", "error_code"),
        [
            (InvalidCandidateError("place_99"), 400, "INVALID_CANDIDATE"),
            (SessionInactiveError("s1"), 409, "SESSION_INACTIVE"),
            (EmptyCandidateSetError("no_results"), 422, "EMPTY_CANDIDATE_SET"),
            (ConcurrentUpdateError("s1", 3), 409, "CONCURRENT_UPDATE"),
            (UpstreamUnavailableError("timeout"), 502, "UPSTREAM_UNAVAILABLE"),
        ],
    )
    async def test_domain_errors_map_to_status(
        self, exc: Exception, status_code: int, error_code: str
    ) -> None:
        response = await _raise_through(exc)

        assert response.status_code == status_code
        assert response.json()["error_code"] == error_code

    @pytest.mark.asyncio
    async def test_http_exception_returns_standard_format(self) -> None:
        from starlette.exceptions import HTTPException

        response = await _raise_through(HTTPException(status_code=403, detail="Forbidden"))

        assert response.status_code == 403
        body = response.json()
        assert body["error_code"] == "HTTP_ERROR"
        assert body["message"] == "Forbidden"

    @pytest.mark.asyncio
    async def test_validation_error_returns_field_details(self) -> None:
        from pydantic import BaseModel, Field

        app = _create_test_app()

        class Body(BaseModel):
            candidate_id: str = Field(..., min_length=1)

        @app.post("/validate")
        async def _(body: Body) -> dict[str, bool]:
            return {"ok": True}

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.post("/validate", json={"candidate_id": ""})

        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert isinstance(body["details"], list)
        assert body["details"][0]["field"] == "body.candidate_id"

    @pytest.mark.asyncio
    async def test_database_error_returns_503(self) -> None:
        from sqlalchemy.exc import OperationalError

        response = await _raise_through(OperationalError("SELECT 1", {}, Exception("down")))

        assert response.status_code == 503
        assert response.json()["error_code"] == "DATABASE_ERROR"

    @pytest.mark.asyncio
    async def test_unhandled_exception_returns_500(self) -> None:
        import json
        from unittest.mock import MagicMock

        app = _create_test_app()

        mock_request = MagicMock()
        mock_request.state.request_id = "test-req-id"

        handler = app.exception_handlers.get(Exception)
        assert handler is not None, "Global exception handler not registered"

        response = await handler(mock_request, RuntimeError("Something went wrong"))  # type: ignore[misc]

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body["error_code"] == "INTERNAL_ERROR"
        assert body["details"]["request_id"] == "test-req-id"

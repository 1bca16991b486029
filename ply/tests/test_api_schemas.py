"""
Tests for API Pydantic schemas.

Validates that:
- Request/response models serialize correctly
- Error codes are properly structured
- The OpenAPI document lists every endpoint and model
"""

import pytest
from pydantic import ValidationError


class TestPydanticSchemas:
    """Tests for Pydantic schema validation."""

    def test_session_response_schema(self):
        """SessionResponse serializes enums as strings."""
        from ply.api.schemas import ActionInfo, SessionResponse, SessionStatus

        response = SessionResponse(
            session_id="session-123",
            status=SessionStatus.YOUR_TURN,
            game_type="tictactoe",
            players=["X", "O"],
            current_player="X",
            legal_actions=[ActionInfo(index=0, name="Mark 0")],
        )

        data = response.model_dump(mode="json")
        assert data["status"] == "your_turn"
        assert data["legal_actions"] == [{"index": 0, "name": "Mark 0"}]
        assert data["api_version"] == "v1"

    def test_apply_action_request_validation(self):
        """Negative action indices are rejected."""
        from ply.api.schemas import ApplyActionRequest

        with pytest.raises(ValidationError):
            ApplyActionRequest(action_index=-1)

    def test_recommendation_request_defaults(self):
        from ply.api.schemas import RecommendationRequest

        request = RecommendationRequest()
        assert request.iterations == 1000
        assert request.open_loop is True

    def test_create_session_request_defaults(self):
        from ply.api.schemas import CreateSessionRequest

        request = CreateSessionRequest()
        assert request.game_type == "tictactoe"
        assert request.bot_players == []
        with pytest.raises(ValidationError):
            CreateSessionRequest(iterations=-5)

    def test_error_response_schema(self):
        from ply.api.schemas import ErrorCode, ErrorResponse

        error = ErrorResponse(error="Session not found", error_code=ErrorCode.SESSION_NOT_FOUND)
        data = error.model_dump(mode="json")
        assert data["error_code"] == "SESSION_NOT_FOUND"
        assert data["details"] is None


class TestErrorCodes:
    """Tests for error code coverage."""

    def test_all_error_codes_defined(self):
        """All required error codes are defined."""
        from ply.api.schemas import ErrorCode

        required_codes = [
            "SESSION_NOT_FOUND",
            "UNKNOWN_GAME",
            "ILLEGAL_ACTION",
            "GAME_OVER",
            "VALIDATION_ERROR",
        ]

        for code in required_codes:
            assert hasattr(ErrorCode, code), f"Missing error code: {code}"
            assert ErrorCode[code].value == code

    def test_error_code_values_are_strings(self):
        """Error codes are string enums for JSON serialization."""
        from ply.api.schemas import ErrorCode

        for code in ErrorCode:
            assert isinstance(code.value, str)
            assert code.value == code.value.upper()

    def test_every_error_code_has_status(self):
        from ply.api.app import ERROR_STATUS
        from ply.api.schemas import ErrorCode

        for code in ErrorCode:
            assert 400 <= ERROR_STATUS[code.value] < 500


class TestOpenAPISchema:
    """Tests for OpenAPI schema generation."""

    def test_openapi_schema_generates(self):
        """OpenAPI schema generates without errors."""
        from ply.api.app import app
        from fastapi.openapi.utils import get_openapi

        schema = get_openapi(
            title=app.title,
            version=app.version,
            routes=app.routes,
        )

        assert "paths" in schema
        assert "components" in schema
        assert "schemas" in schema["components"]

    def test_response_models_in_schema(self):
        """Response models appear in OpenAPI schema."""
        from ply.api.app import app
        from fastapi.openapi.utils import get_openapi

        schema = get_openapi(
            title=app.title,
            version=app.version,
            routes=app.routes,
        )

        schemas = schema["components"]["schemas"]

        required_schemas = [
            "SessionResponse",
            "RecommendationResponse",
            "ActionStats",
            "ActionInfo",
            "GameInfo",
            "ErrorResponse",
            "HealthResponse",
        ]

        for name in required_schemas:
            assert name in schemas, f"Missing schema: {name}"

    def test_endpoints_present(self):
        """All play endpoints are routed."""
        from ply.api.app import create_app
        from ply.api.service import APIService
        from fastapi.openapi.utils import get_openapi

        app = create_app(APIService())
        schema = get_openapi(
            title=app.title,
            version=app.version,
            routes=app.routes,
        )
        paths = schema["paths"]

        assert "get" in paths["/health"]
        assert "get" in paths["/api/v1/games"]
        assert {"get", "post"} <= set(paths["/api/v1/sessions"])
        assert {"get", "delete"} <= set(paths["/api/v1/sessions/{session_id}"])
        assert "post" in paths["/api/v1/sessions/{session_id}/actions"]
        assert "post" in paths["/api/v1/sessions/{session_id}/bot-turn"]
        assert "post" in paths["/api/v1/sessions/{session_id}/recommendation"]

        post_session = paths["/api/v1/sessions"]["post"]
        assert "200" in post_session["responses"]
        assert "400" in post_session["responses"]

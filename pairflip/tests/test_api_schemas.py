"""
Tests for API Pydantic schemas.

Validates that:
- Request/response models serialize correctly
- Error codes are properly structured
- Face-down cards serialize without a symbol
"""

import pytest
from pydantic import ValidationError


class TestPydanticSchemas:
    """Tests for Pydantic schema validation."""

    def test_game_state_response_schema(self):
        """GameStateResponse serializes status as its string value."""
        from pairflip.api.schemas import GameStateResponse, GameStatus, CardInfo

        response = GameStateResponse(
            session_id="session-1",
            game_id="game-1",
            status=GameStatus.RESOLVING,
            cards=[CardInfo(card_id=3, position=0, symbol="IV", is_flipped=True)],
            selection=[3, 11],
            move_count=2,
            matched_pairs=1,
            remaining_pairs=7,
            is_resolving=True,
        )

        data = response.model_dump(mode="json")
        assert data["status"] == "resolving"
        assert data["selection"] == [3, 11]
        assert data["cards"][0]["symbol"] == "IV"
        assert data["api_version"] == "v1"
        assert data["is_won"] is False

    def test_card_info_symbol_optional(self):
        """A face-down card has no symbol."""
        from pairflip.api.schemas import CardInfo

        card = CardInfo(card_id=5, position=12)
        data = card.model_dump()
        assert data["symbol"] is None
        assert data["is_flipped"] is False
        assert data["is_matched"] is False

    def test_select_card_request_requires_card_id(self):
        """SelectCardRequest rejects a missing card_id."""
        from pairflip.api.schemas import SelectCardRequest

        with pytest.raises(ValidationError):
            SelectCardRequest()

        assert SelectCardRequest(card_id=7).card_id == 7

    def test_select_card_request_rejects_text(self):
        from pairflip.api.schemas import SelectCardRequest

        with pytest.raises(ValidationError):
            SelectCardRequest(card_id="seven")

    def test_create_session_request_seed_optional(self):
        from pairflip.api.schemas import CreateSessionRequest

        assert CreateSessionRequest().seed is None
        assert CreateSessionRequest(seed=12).seed == 12

    def test_error_response_schema(self):
        """ErrorResponse has required fields."""
        from pairflip.api.schemas import ErrorResponse, ErrorCode

        error = ErrorResponse(
            error="Session abc not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
            details={"session_id": "abc"},
        )

        data = error.model_dump(mode="json")
        assert data["error_code"] == "SESSION_NOT_FOUND"
        assert data["details"] == {"session_id": "abc"}


class TestErrorCodes:
    """Tests for error code enumeration."""

    def test_all_error_codes_defined(self):
        """All expected error codes are defined."""
        from pairflip.api.schemas import ErrorCode

        required_codes = [
            "SESSION_NOT_FOUND",
            "VALIDATION_ERROR",
            "INTERNAL_ERROR",
        ]

        for code in required_codes:
            assert hasattr(ErrorCode, code), f"Missing error code: {code}"
            assert ErrorCode[code].value == code

    def test_error_code_values_are_strings(self):
        """Error codes are string enums for JSON serialization."""
        from pairflip.api.schemas import ErrorCode

        for code in ErrorCode:
            assert isinstance(code.value, str)
            assert code.value == code.value.upper()

    def test_status_matches_game_phase(self):
        """Every engine phase has a public status."""
        from pairflip.api.schemas import GameStatus
        from pairflip.engine_core.state import GamePhase

        for phase in GamePhase:
            assert GameStatus(phase.value).value == phase.value


class TestOpenAPISchema:
    """Tests for OpenAPI schema generation."""

    def test_openapi_schema_generates(self):
        """OpenAPI schema generates without errors."""
        from pairflip.api.app import app
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
        from pairflip.api.app import app
        from fastapi.openapi.utils import get_openapi

        schema = get_openapi(
            title=app.title,
            version=app.version,
            routes=app.routes,
        )

        schemas = schema["components"]["schemas"]

        required_schemas = [
            "GameStateResponse",
            "SelectCardResponse",
            "SessionListResponse",
            "CardInfo",
            "ErrorResponse",
        ]

        for name in required_schemas:
            assert name in schemas, f"Missing schema: {name}"

    def test_endpoints_have_response_models(self):
        """Main endpoints are present with their success responses."""
        from pairflip.api.app import app
        from fastapi.openapi.utils import get_openapi

        schema = get_openapi(
            title=app.title,
            version=app.version,
            routes=app.routes,
        )

        paths = schema["paths"]

        assert "/api/v1/sessions" in paths
        assert "201" in paths["/api/v1/sessions"]["post"]["responses"]

        select = paths["/api/v1/sessions/{session_id}/select"]["post"]
        assert "200" in select["responses"]
        assert "404" in select["responses"]

        assert "/api/v1/sessions/{session_id}/reset" in paths
        assert "delete" in paths["/api/v1/sessions/{session_id}"]

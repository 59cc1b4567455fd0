"""Unit tests for inbound request validation."""

import pytest

from src.hooks.request_validation import parse_recipe_request, validate_method
from src.utils.errors import InvalidJSONError, MethodNotAllowedError, MissingIngredientsError


class TestValidateMethod:
    """Only POST is accepted."""

    @pytest.mark.parametrize("method", ["POST", "post"])
    def test_post_accepted(self, method):
        validate_method(method)  # Should not raise

    @pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD", ""])
    def test_other_methods_rejected(self, method):
        with pytest.raises(MethodNotAllowedError) as exc:
            validate_method(method)
        assert exc.value.status_code == 405
        assert exc.value.code == "METHOD_NOT_ALLOWED"


class TestParseRecipeRequest:
    """Body must be a JSON object with a non-blank ingredients string."""

    def test_valid_body(self):
        request = parse_recipe_request(b'{"ingredients": "broccoli, olive oil"}')
        assert request.ingredients == "broccoli, olive oil"

    def test_accepts_str_body(self):
        request = parse_recipe_request('{"ingredients": "eggs"}')
        assert request.ingredients == "eggs"

    def test_ingredients_trimmed(self):
        request = parse_recipe_request(b'{"ingredients": "  spinach  "}')
        assert request.ingredients == "spinach"

    def test_extra_fields_ignored(self):
        request = parse_recipe_request(b'{"ingredients": "tofu", "servings": 2}')
        assert request.ingredients == "tofu"

    @pytest.mark.parametrize("body", [b"", b"not json", b'{"ingredients": ', b"\xff\xfe\x00"])
    def test_invalid_json(self, body):
        with pytest.raises(InvalidJSONError) as exc:
            parse_recipe_request(body)
        assert exc.value.status_code == 400
        assert exc.value.code == "INVALID_JSON"

    @pytest.mark.parametrize(
        "body",
        [
            b"{}",
            b'{"ingredients": ""}',
            b'{"ingredients": "   "}',
            b'{"ingredients": null}',
            b'{"ingredients": 5}',
            b'{"ingredients": ["broccoli"]}',
            b'{"other": "broccoli"}',
        ],
    )
    def test_missing_ingredients(self, body):
        with pytest.raises(MissingIngredientsError) as exc:
            parse_recipe_request(body)
        assert exc.value.status_code == 400
        assert exc.value.code == "MISSING_INGREDIENTS"

    @pytest.mark.parametrize("body", [b"[]", b'"broccoli"', b"42", b"null"])
    def test_non_object_json(self, body):
        with pytest.raises(MissingIngredientsError):
            parse_recipe_request(body)

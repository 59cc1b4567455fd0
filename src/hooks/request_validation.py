"""Inbound request validation.

Two checks run on either side of the rate limiter:
1. validate_method: cheap verb check, before any quota is consumed
2. parse_recipe_request: JSON decoding and RecipeRequest shape, after admission

Both are pure: no I/O, no awaits.
"""

import json

from pydantic import ValidationError

from src.models.models import RecipeRequest
from src.utils.errors import InvalidJSONError, MethodNotAllowedError, MissingIngredientsError
from src.utils.logger import logger


ALLOWED_METHOD = "POST"


def validate_method(method: str) -> None:
    """Reject any verb other than POST.

    Raises:
        MethodNotAllowedError: If method is not POST.
    """
    if (method or "").upper() != ALLOWED_METHOD:
        logger.debug(f"Rejected method: {method}")
        raise MethodNotAllowedError(f"Only {ALLOWED_METHOD} is supported")


def parse_recipe_request(body: bytes | str) -> RecipeRequest:
    """Decode the request body into a RecipeRequest.

    Args:
        body: Raw request body.

    Returns:
        RecipeRequest with trimmed, non-empty ingredients.

    Raises:
        InvalidJSONError: If body is empty or not valid JSON.
        MissingIngredientsError: If body is not an object or lacks a non-blank
            ingredients string.
    """
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as e:
        logger.debug(f"Request body is not JSON: {e}")
        raise InvalidJSONError() from e

    if not isinstance(data, dict):
        raise MissingIngredientsError("Request body must be an object with an 'ingredients' string")

    try:
        return RecipeRequest.model_validate(data)
    except ValidationError as e:
        logger.debug(f"RecipeRequest validation failed: {e.error_count()} error(s)")
        raise MissingIngredientsError("Provide a non-empty 'ingredients' string") from e

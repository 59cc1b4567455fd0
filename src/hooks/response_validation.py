"""Structural validation of model output.

The completion content is untrusted text. It is parsed to a generic JSON value
first and only then checked against the Recipe shape. The parsed object is
returned as-is, so the caller sees exactly what the model produced.
"""

import json
from typing import Any, Optional

from pydantic import ValidationError

from src.models.models import Recipe
from src.utils.errors import EmptyAIResponseError, InvalidRecipeFormatError
from src.utils.logger import logger


def _describe_missing_fields(error: ValidationError) -> str:
    """Render pydantic error locations as dotted paths, e.g. 'ingredients.provided'."""
    paths = []
    for detail in error.errors():
        path = ".".join(str(part) for part in detail["loc"])
        if path and path not in paths:
            paths.append(path)
    return ", ".join(paths)


def validate_recipe_content(raw_content: Optional[str]) -> dict[str, Any]:
    """Validate completion content and return the recipe object.

    Args:
        raw_content: choices[0].message.content from the upstream response.

    Returns:
        The parsed recipe dict, unmodified.

    Raises:
        EmptyAIResponseError: If content is missing, not a string, or blank.
        InvalidRecipeFormatError: If content is not JSON, not an object, or is
            missing title, ingredients.provided or instructions.
    """
    if not isinstance(raw_content, str) or not raw_content.strip():
        raise EmptyAIResponseError()

    try:
        parsed = json.loads(raw_content)
    except json.JSONDecodeError as e:
        logger.warning(f"AI response is not valid JSON: {e}")
        raise InvalidRecipeFormatError("PARSE_ERROR: AI response was not valid JSON") from e

    if not isinstance(parsed, dict):
        raise InvalidRecipeFormatError("AI response was not a JSON object")

    try:
        Recipe.model_validate(parsed)
    except ValidationError as e:
        fields = _describe_missing_fields(e)
        logger.warning(f"AI recipe failed structural validation: {fields}")
        raise InvalidRecipeFormatError(f"AI recipe is missing or has malformed fields: {fields}") from e

    return parsed

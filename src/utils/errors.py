"""Error taxonomy for the recipe generation pipeline.

Every failure the pipeline can produce is a RecipeServiceError subclass that
carries its HTTP status, stable error code and default client-facing text.
classify_error() turns any exception, known or not, into the response pair.
"""

from typing import Optional

from src.models.models import ErrorResponse


class RecipeServiceError(Exception):
    """Base class for classified pipeline failures."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    error: str = "Recipe generation failed"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.error)
        self.message = message

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(error=self.error, code=self.code, message=self.message)


class MethodNotAllowedError(RecipeServiceError):
    status_code = 405
    code = "METHOD_NOT_ALLOWED"
    error = "Method not allowed"


class RateLimitedError(RecipeServiceError):
    status_code = 429
    code = "RATE_LIMITED"
    error = "Too many requests"


class InvalidJSONError(RecipeServiceError):
    status_code = 400
    code = "INVALID_JSON"
    error = "Request body must be valid JSON"


class MissingIngredientsError(RecipeServiceError):
    status_code = 400
    code = "MISSING_INGREDIENTS"
    error = "Ingredients are required"


class MissingApiKeyError(RecipeServiceError):
    code = "MISSING_API_KEY"
    error = "Recipe service is not configured"


class UpstreamTimeoutError(RecipeServiceError):
    code = "TIMEOUT"
    error = "Recipe generation timed out"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(
            message or "The recipe took too long to generate. Try again with fewer or simpler ingredients."
        )


class UpstreamError(RecipeServiceError):
    """Upstream call failed for a reason other than the deadline.

    message holds the provider's error text when its body had one.
    """


class EmptyAIResponseError(RecipeServiceError):
    code = "EMPTY_AI_RESPONSE"
    error = "AI returned an empty response"


class InvalidRecipeFormatError(RecipeServiceError):
    code = "INVALID_RECIPE_FORMAT"
    error = "AI returned a recipe in an unexpected format"


def classify_error(exc: BaseException) -> tuple[int, ErrorResponse]:
    """Map any exception to (status code, error body).

    Unclassified exceptions become 500 INTERNAL_ERROR without leaking their text.
    """
    if isinstance(exc, RecipeServiceError):
        return exc.status_code, exc.to_response()
    return 500, ErrorResponse(error=RecipeServiceError.error, code=RecipeServiceError.code)

"""Request orchestration for recipe generation.

RecipeHandler runs one request through the pipeline:

1. validate_method          - POST only (no quota consumed otherwise)
2. RateLimiter              - per-client admission
3. parse_recipe_request     - JSON body with non-blank ingredients
4. build_recipe_prompt      - prompt text for the model
5. CompletionClient         - single deadline-bounded upstream call
6. validate_recipe_content  - JSON parse and structural recipe check

The first failure short-circuits and is classified exactly once into a
(status, error body) pair. The handler is transport-agnostic: app.py adapts
it to FastAPI and query.py calls it directly.
"""

import uuid
from dataclasses import dataclass
from typing import Any, Optional

from src.clients.completion_client import CompletionClient
from src.hooks.request_validation import parse_recipe_request, validate_method
from src.hooks.response_validation import validate_recipe_content
from src.prompts.prompts import build_recipe_prompt
from src.utils.errors import RateLimitedError, RecipeServiceError, classify_error
from src.utils.logger import logger
from src.utils.rate_limiter import RateLimiter


@dataclass
class HandlerResult:
    """Status code and JSON body of the single response for a request."""

    status_code: int
    body: dict[str, Any]


class RecipeHandler:
    """Sequences validation, admission, the upstream call and response checks."""

    def __init__(
        self,
        rate_limiter: Optional[RateLimiter] = None,
        completion_client: Optional[CompletionClient] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        """Initialize the handler.

        Args:
            rate_limiter: Shared limiter. A new process-wide one is created if omitted.
            completion_client: Upstream adapter. Built from config if omitted.
            timeout_seconds: Deadline passed to each upstream call. Defaults to
                the client's configured deadline.
        """
        self.rate_limiter = RateLimiter() if rate_limiter is None else rate_limiter
        self.completion_client = CompletionClient() if completion_client is None else completion_client
        self.timeout_seconds = timeout_seconds

    async def handle(
        self,
        method: str,
        body: bytes | str,
        client_id: str,
        request_id: Optional[str] = None,
    ) -> HandlerResult:
        """Handle one inbound request.

        Never raises for pipeline failures: every exception is classified into
        an error result.

        Args:
            method: HTTP method of the request.
            body: Raw request body.
            client_id: Rate-limit key for the caller.
            request_id: Correlation id for logs; generated if omitted.

        Returns:
            HandlerResult with 200 and the recipe, or the classified error.
        """
        log_extra = {"request_id": request_id or uuid.uuid4().hex, "client_id": client_id}
        logger.info(f"Recipe request: {method} from {client_id}", extra=log_extra)

        try:
            recipe = await self._generate(method, body, client_id, log_extra)
        except Exception as e:
            return self._error_result(e, log_extra)

        logger.info(f"Recipe generated: {recipe.get('title')!r}", extra=log_extra)
        return HandlerResult(status_code=200, body=recipe)

    async def _generate(
        self,
        method: str,
        body: bytes | str,
        client_id: str,
        log_extra: dict[str, str],
    ) -> dict[str, Any]:
        validate_method(method)

        if not self.rate_limiter.check_and_increment(client_id):
            raise RateLimitedError(
                f"Limit is {self.rate_limiter.max_requests} requests per "
                f"{self.rate_limiter.window_seconds:.0f} seconds. Please wait and try again."
            )

        recipe_request = parse_recipe_request(body)
        logger.debug(f"Ingredients: {recipe_request.ingredients}", extra=log_extra)

        prompt = build_recipe_prompt(recipe_request.ingredients)
        content = await self.completion_client.complete(prompt, timeout_seconds=self.timeout_seconds)
        return validate_recipe_content(content)

    @staticmethod
    def _error_result(exc: Exception, log_extra: dict[str, str]) -> HandlerResult:
        status_code, error = classify_error(exc)

        if not isinstance(exc, RecipeServiceError):
            logger.error(f"Unhandled error during recipe generation: {exc}", exc_info=True, extra=log_extra)
        elif status_code >= 500:
            logger.error(f"Recipe generation failed: {error.code} ({exc})", extra=log_extra)
        else:
            logger.warning(f"Request rejected: {error.code} ({exc})", extra=log_extra)

        return HandlerResult(status_code=status_code, body=error.model_dump(exclude_none=True))

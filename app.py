"""FastAPI Application - Diabetic Recipe Service.

Single entry point for the HTTP service:
- POST /api/generate: ingredients in, diabetes-friendly recipe JSON out
- GET /health: liveness probe

Every verb on /api/generate is routed to RecipeHandler so that wrong methods
get the service's own 405 error body instead of the framework default.

Run with: python app.py
"""

import uuid
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.handlers.recipe_handler import RecipeHandler
from src.utils.config import config
from src.utils.logger import logger


GENERATE_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


def get_client_identity(request: Request) -> str:
    """Derive the rate-limit key for a request.

    Uses the first address in X-Forwarded-For when present, otherwise the
    socket peer address. The header is taken on trust: deploy behind a proxy
    that overwrites X-Forwarded-For, or clients can rotate it to reset quota.
    """
    forwarded_for = request.headers.get("x-forwarded-for", "")
    first_hop = forwarded_for.split(",")[0].strip()
    if first_hop:
        return first_hop
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def create_app(handler: Optional[RecipeHandler] = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        handler: Pipeline to serve. A default RecipeHandler (process-wide rate
            limiter, config-driven completion client) is created if omitted.

    Returns:
        Configured FastAPI instance.
    """
    recipe_handler = RecipeHandler() if handler is None else handler
    application = FastAPI(
        title="Diabetic Recipe Service",
        description="Generates diabetes-friendly recipes from a list of ingredients",
    )
    application.state.recipe_handler = recipe_handler

    @application.api_route("/api/generate", methods=GENERATE_METHODS)
    async def generate_recipe(request: Request) -> JSONResponse:
        request_id = uuid.uuid4().hex
        result = await recipe_handler.handle(
            method=request.method,
            body=await request.body(),
            client_id=get_client_identity(request),
            request_id=request_id,
        )
        return JSONResponse(
            status_code=result.status_code,
            content=result.body,
            headers={"X-Request-ID": request_id},
        )

    @application.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    return application


app = create_app()


if __name__ == "__main__":
    logger.info(f"Starting Diabetic Recipe Service on port {config.PORT}")
    logger.info(f"Upstream model: {config.OPENAI_MODEL} (deadline {config.UPSTREAM_TIMEOUT_SECONDS:.0f}s)")
    logger.info(f"API docs available at: http://localhost:{config.PORT}/docs")
    uvicorn.run(app, host=config.HOST, port=config.PORT)

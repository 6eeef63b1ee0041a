"""FastAPI application factory / entrypoint.

This service exposes HTTP endpoints for:
- the club snapshot merged with locally stored member goals
- player details proxied from the Brawl Stars API
- saving member goals
- diagnostics (public IP for allow-listing) and health checks

The API is intended to be consumed by the React dashboard.

Operational notes:
- CORS is enabled for the configured origins (local Vite development by default).
- The upstream gateway and the goal store are built once in `create_app` and
  reach handlers through FastAPI dependencies (`app.state`).
- Run locally with `uvicorn --factory app.main:create_app` from
  `services/api`, or `python -m app.main`. Importing this module has no side
  effects; the app, its HTTP client and logging are set up by `create_app`.
"""

import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from common.logging import configure_logging

from .errors import StoreError, register_error_handlers
from .gateway import BrawlStarsGateway
from .routes import router
from .settings import Settings, get_settings
from .store import GoalStore

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, gateway: BrawlStarsGateway | None = None,
               store: GoalStore | None = None) -> FastAPI:
    """Build the API application.

    Args:
        settings: Service settings; defaults to `get_settings()`.
        gateway: Upstream gateway; built from `settings` when omitted.
        store: Goal store; built on `settings.goals_file` when omitted.

    Returns:
        FastAPI: The configured application.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_json)

    gateway = gateway or BrawlStarsGateway.from_settings(settings)
    store = store or GoalStore(settings.goals_file)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not settings.brawl_api_key:
            logger.warning("BRAWL_API_KEY is not set; upstream requests will be rejected")
        try:
            goals = store.read_all()
            logger.info("Loaded %d goals from %s", len(goals), store.path)
        except StoreError as exc:
            logger.error("Goal store is unusable: %s", exc.message)
        logger.info("API online, club %s, upstream %s", settings.club_tag, settings.brawl_api_base_url)
        yield
        gateway.close()

    app = FastAPI(title="Club Hub API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.gateway = gateway
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method, request.url.path, response.status_code, elapsed_ms,
            extra={"request_id": request_id},
        )
        response.headers["X-Request-ID"] = request_id
        return response

    register_error_handlers(app)
    app.include_router(router)

    @app.get("/health")
    def health():
        """Health check endpoint.

        Returns a minimal payload used by local dev tooling and containers to
        determine whether the API process is up. It does not call the provider.

        Returns:
            dict: `{"status": "ok", "service": "api"}`.
        """
        return {"status": "ok", "service": "api"}

    return app


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(create_app(_settings), host=_settings.host, port=_settings.port)

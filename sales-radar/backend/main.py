"""Backend API application entrypoint for the Model Sales Radar service."""

from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Settings, get_settings
from data_store import seed_radar_store
from dependencies import get_radar_store
from routes.radar_routes import router as radar_router
from services.radar_store import RadarStore


def configure_logging(settings: Settings) -> logging.Logger:
	"""Configure application-wide structured logging."""
	logging.basicConfig(
		level=getattr(logging, settings.log_level.upper(), logging.INFO),
		format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
	)
	logger = logging.getLogger("model-sales-radar")
	logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
	return logger


settings = get_settings()
logger = configure_logging(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
	"""Manage startup and shutdown lifecycle events."""
	app_settings: Settings = app.state.settings
	logger.info("Starting server | app=%s | version=%s", app_settings.app_name, app_settings.app_version)
	store = RadarStore()
	if app_settings.seed_demo_data:
		seeded = seed_radar_store(store, month=app_settings.seed_month)
		logger.info("Radar store seeded | entries=%s", seeded)
	app.state.radar_store = store
	app.state.started_at = time.time()
	app.state.instance_id = str(uuid.uuid4())
	app.state.environment = app_settings.environment
	yield
	store.reset()
	logger.info("Shutting down server | app=%s", app_settings.app_name)


def add_cors_middleware(app: FastAPI, app_settings: Settings) -> None:
	"""Attach CORS middleware for frontend interaction."""
	app.add_middleware(
		CORSMiddleware,
		allow_origins=app_settings.allowed_cors_origins,
		allow_credentials=True,
		allow_methods=["*"],
		allow_headers=["*"],
	)


def add_request_context_middleware(app: FastAPI) -> None:
	"""Attach request context middleware for tracing and observability."""

	@app.middleware("http")
	async def inject_request_context(request: Request, call_next: Callable):
		request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
		request.state.request_id = request_id
		start = time.perf_counter()

		response = await call_next(request)

		elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
		response.headers["X-Request-ID"] = request_id
		response.headers["X-Response-Time-ms"] = str(elapsed_ms)

		logger.info(
			"request_complete | request_id=%s | method=%s | path=%s | status=%s | latency_ms=%s",
			request_id,
			request.method,
			request.url.path,
			response.status_code,
			elapsed_ms,
		)
		return response


def register_exception_handlers(app: FastAPI) -> None:
	"""Register global exception handlers."""

	@app.exception_handler(StarletteHTTPException)
	async def http_exception_handler(request: Request, exc: StarletteHTTPException):
		request_id = getattr(request.state, "request_id", "unknown")
		return JSONResponse(
			status_code=exc.status_code,
			content={
				"error": {
					"type": "http_error",
					"message": exc.detail,
					"request_id": request_id,
				}
			},
		)

	@app.exception_handler(RequestValidationError)
	async def validation_exception_handler(request: Request, exc: RequestValidationError):
		request_id = getattr(request.state, "request_id", "unknown")
		return JSONResponse(
			status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
			content={
				"error": {
					"type": "validation_error",
					"message": "Request payload validation failed.",
					"details": jsonable_errors(exc),
					"request_id": request_id,
				}
			},
		)

	@app.exception_handler(Exception)
	async def unhandled_exception_handler(request: Request, exc: Exception):
		request_id = getattr(request.state, "request_id", "unknown")
		logger.exception("unhandled_exception | request_id=%s", request_id)
		return JSONResponse(
			status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
			content={
				"error": {
					"type": "internal_server_error",
					"message": "An unexpected error occurred.",
					"request_id": request_id,
				}
			},
		)


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, object]]:
	"""Reduce validation errors to JSON-safe location, message and type fields."""
	return [
		{
			"loc": [str(part) for part in error.get("loc", ())],
			"msg": str(error.get("msg", "")),
			"type": str(error.get("type", "")),
		}
		for error in exc.errors()
	]


def register_routes(app: FastAPI, app_settings: Settings) -> None:
	"""Register all feature routers with a shared API prefix."""
	app.include_router(radar_router, prefix=app_settings.api_prefix)


def create_app(app_settings: Settings | None = None) -> FastAPI:
	"""Create and configure FastAPI application instance."""
	active_settings = app_settings or settings
	app = FastAPI(
		title=active_settings.app_name,
		version=active_settings.app_version,
		description=active_settings.app_description,
		lifespan=lifespan,
		docs_url="/docs",
		redoc_url="/redoc",
		openapi_url=f"{active_settings.api_prefix}/openapi.json",
	)
	app.state.settings = active_settings

	add_cors_middleware(app, active_settings)
	add_request_context_middleware(app)
	register_exception_handlers(app)
	register_routes(app, active_settings)

	@app.get("/", tags=["system"], summary="Root endpoint")
	def root() -> dict[str, str]:
		return {
			"service": active_settings.app_name,
			"version": active_settings.app_version,
			"status": "running",
		}

	@app.get("/health", tags=["system"], summary="Service health check")
	def health_check(store: RadarStore = Depends(get_radar_store)) -> dict[str, object]:
		"""Return runtime and store health status."""
		cohorts = store.cohort_count()
		uptime_seconds = int(time.time() - app.state.started_at)

		return {
			"status": "healthy" if cohorts else "empty",
			"code": "ok" if cohorts else "no_cohorts",
			"environment": app.state.environment,
			"version": active_settings.app_version,
			"instance_id": app.state.instance_id,
			"store": {"cohorts": cohorts, "months": store.list_months()},
			"uptime_seconds": uptime_seconds,
		}

	return app


app = create_app()

"""Shared dependency providers and injectable backend application dependencies."""

from __future__ import annotations

from fastapi import Request

from services.radar_store import RadarStore


def get_radar_store(request: Request) -> RadarStore:
	"""Expose the application-scoped radar store to FastAPI route handlers."""
	return request.app.state.radar_store

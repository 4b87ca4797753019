from .radar_routes import router as radar_routes

__all__ = [
    "radar_routes",
]

"""Centralized backend configuration and environment-driven settings definitions."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.month_utils import is_valid_month


class Settings(BaseSettings):
	"""Application settings loaded from environment variables."""

	model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

	ENVIRONMENT: Literal["development", "staging", "production", "test"] = Field(default="production")

	app_name: str = Field(default="Model Sales Radar")
	app_version: str = Field(default="1.0.0")
	app_description: str = Field(
		default=(
			"Analytics API ranking vehicle models by month-over-month sales momentum, "
			"split by domestic and import nation."
		)
	)
	debug: bool = Field(default=False)

	api_prefix: str = Field(default="/api")
	frontend_origin: str = Field(default="http://localhost:5173")
	cors_origins: str = Field(default="http://localhost:5173,http://127.0.0.1:5173")

	log_level: str = Field(default="INFO")

	seed_demo_data: bool = Field(default=True)
	seed_month: Optional[str] = Field(default=None)

	@field_validator("log_level")
	@classmethod
	def validate_log_level(cls, value: str) -> str:
		"""Validate log level against the standard logging level names."""
		normalized = value.strip().upper()
		if not isinstance(logging.getLevelName(normalized), int):
			raise ValueError(f"log_level must be a standard logging level name, got '{value}'.")
		return normalized

	@field_validator("seed_month")
	@classmethod
	def validate_seed_month(cls, value: Optional[str]) -> Optional[str]:
		"""Validate the optional seed month override format."""
		if value is None or not value.strip():
			return None
		cleaned = value.strip()
		if not is_valid_month(cleaned):
			raise ValueError("seed_month must use the YYYY-MM format.")
		return cleaned

	@property
	def environment(self) -> str:
		"""Backward-compatible lowercase accessor for deployment environment."""
		return self.ENVIRONMENT

	@property
	def allowed_cors_origins(self) -> List[str]:
		"""Return normalized CORS origins list."""
		raw_origins = [item.strip() for item in self.cors_origins.split(",")]
		merged = [origin for origin in raw_origins if origin]
		if self.frontend_origin and self.frontend_origin not in merged:
			merged.append(self.frontend_origin)
		return merged


@lru_cache(maxsize=1)
def get_settings() -> Settings:
	"""Return cached settings instance for dependency injection."""
	return Settings()

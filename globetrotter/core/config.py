"""Configuration helpers for API keys and environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional


DEFAULT_CORS_ORIGINS = ["http://localhost:5173", "http://localhost:8080"]


@dataclass(slots=True)
class ApiSettings:
    """Centralised container for the external service credentials."""

    xai_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    llm_provider: str = "xai"
    llm_model: Optional[str] = None
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    environment: str = "production"
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    sentry_dsn: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ApiSettings":
        """Load settings from the process environment (after ``load_dotenv``)."""

        raw_origins = os.getenv("CORS_ORIGINS")
        origins = (
            [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
            if raw_origins
            else list(DEFAULT_CORS_ORIGINS)
        )
        return cls(
            xai_api_key=os.getenv("XAI_API_KEY"),
            openai_api_key=os.getenv("OPENAI_API_KEY"),
            llm_provider=os.getenv("LLM_PROVIDER", "xai").lower(),
            llm_model=os.getenv("LLM_MODEL"),
            supabase_url=os.getenv("SUPABASE_URL"),
            supabase_key=os.getenv("SUPABASE_KEY"),
            environment=os.getenv("APP_ENV", "production").lower(),
            cors_origins=origins,
            sentry_dsn=os.getenv("SENTRY_DSN"),
        )

    def ensure(self, field: str) -> str:
        """Return the requested field and fail fast if it is missing."""

        value = getattr(self, field)
        if not value:
            raise RuntimeError(f"Missing configuration value: {field}")
        return value

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def llm_api_key(self) -> Optional[str]:
        """Credential for the configured generation provider, if any."""

        if self.llm_provider == "openai":
            return self.openai_api_key
        return self.xai_api_key

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

"""
Runtime credentials for the scraping service and the catalog backend.

Credentials come from the environment only. Scripts call load_dotenv()
before Settings.from_env() so a local .env file works too.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from .errors import ConfigurationError

FIRECRAWL_NOT_CONFIGURED = "Firecrawl API key not configured"
SUPABASE_NOT_CONFIGURED = "Supabase not configured"


@dataclass
class Settings:
    firecrawl_api_key: str = ""
    supabase_url: str = ""
    supabase_service_key: str = ""

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        """Read settings from environment variables (or a given mapping)."""
        if env is None:
            env = os.environ
        return cls(
            firecrawl_api_key=env.get("FIRECRAWL_API_KEY", ""),
            supabase_url=env.get("SUPABASE_URL", "") or env.get("VITE_SUPABASE_URL", ""),
            supabase_service_key=env.get("SUPABASE_SERVICE_ROLE_KEY", ""),
        )

    def require_firecrawl(self) -> str:
        """Return the Firecrawl key or raise ConfigurationError."""
        if not self.firecrawl_api_key:
            raise ConfigurationError(FIRECRAWL_NOT_CONFIGURED)
        return self.firecrawl_api_key

    def require_supabase(self) -> tuple[str, str]:
        """Return (url, service key) or raise ConfigurationError."""
        if not self.supabase_url or not self.supabase_service_key:
            raise ConfigurationError(SUPABASE_NOT_CONFIGURED)
        return self.supabase_url, self.supabase_service_key

"""Tests for sakescan/common/settings.py"""

import pytest

from sakescan.common.errors import ConfigurationError
from sakescan.common.settings import Settings


class TestFromEnv:
    def test_reads_all_keys(self):
        settings = Settings.from_env({
            "FIRECRAWL_API_KEY": "fc-test",
            "SUPABASE_URL": "https://abc.supabase.co",
            "SUPABASE_SERVICE_ROLE_KEY": "service",
        })
        assert settings.firecrawl_api_key == "fc-test"
        assert settings.supabase_url == "https://abc.supabase.co"
        assert settings.supabase_service_key == "service"

    def test_vite_url_fallback(self):
        settings = Settings.from_env({"VITE_SUPABASE_URL": "https://vite.supabase.co"})
        assert settings.supabase_url == "https://vite.supabase.co"

    def test_supabase_url_preferred_over_vite(self):
        settings = Settings.from_env({
            "SUPABASE_URL": "https://main.supabase.co",
            "VITE_SUPABASE_URL": "https://vite.supabase.co",
        })
        assert settings.supabase_url == "https://main.supabase.co"

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("FIRECRAWL_API_KEY", "fc-env")
        assert Settings.from_env().firecrawl_api_key == "fc-env"


class TestRequire:
    def test_missing_firecrawl_key(self):
        with pytest.raises(ConfigurationError, match="Firecrawl API key not configured"):
            Settings().require_firecrawl()

    def test_firecrawl_key_returned(self):
        assert Settings(firecrawl_api_key="fc").require_firecrawl() == "fc"

    def test_missing_service_key(self):
        with pytest.raises(ConfigurationError, match="Supabase not configured"):
            Settings(supabase_url="https://abc.supabase.co").require_supabase()

    def test_supabase_pair_returned(self):
        settings = Settings(supabase_url="https://abc.supabase.co", supabase_service_key="k")
        assert settings.require_supabase() == ("https://abc.supabase.co", "k")

from __future__ import annotations

import os
import sys
import unittest
from pathlib import Path
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from tavily_client import DEFAULT_BASE_URL, TavilyClient, TavilyConfigError
from tavily_client.settings import Settings


class TestSettings(unittest.TestCase):
    def test_defaults_when_env_is_empty(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env()
        self.assertEqual(settings.tavily_api_key, "")
        self.assertEqual(settings.tavily_base_url, DEFAULT_BASE_URL)
        self.assertIsNone(settings.tavily_timeout_seconds)

    def test_reads_env(self) -> None:
        with patch.dict(
            os.environ,
            {
                "TAVILY_API_KEY": "  tvly-key  ",
                "TAVILY_BASE_URL": "https://proxy.example.org",
                "TAVILY_TIMEOUT_SECONDS": "12.5",
            },
            clear=True,
        ):
            settings = Settings.from_env()
        self.assertEqual(settings.tavily_api_key, "tvly-key")
        self.assertEqual(settings.tavily_base_url, "https://proxy.example.org")
        self.assertEqual(settings.tavily_timeout_seconds, 12.5)

    def test_bad_timeout_raises_config_error(self) -> None:
        with patch.dict(os.environ, {"TAVILY_TIMEOUT_SECONDS": "abc"}, clear=True):
            with self.assertRaises(TavilyConfigError):
                Settings.from_env()


class TestClientConstruction(unittest.TestCase):
    def test_construction_needs_no_network_and_strips_slash(self) -> None:
        client = TavilyClient("any-opaque-value", base_url="https://proxy.example.org/")
        self.assertEqual(client.base_url, "https://proxy.example.org")
        self.assertIsNone(client.timeout)
        self.assertNotIn("any-opaque-value", repr(client))

    def test_from_env_requires_api_key(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(TavilyConfigError) as ctx:
                TavilyClient.from_env()
        self.assertIn("TAVILY_API_KEY", str(ctx.exception))
        self.assertEqual(ctx.exception.stage, "config")

    def test_from_env_applies_settings(self) -> None:
        with patch.dict(
            os.environ,
            {"TAVILY_API_KEY": "tvly-key", "TAVILY_BASE_URL": "https://proxy.example.org/", "TAVILY_TIMEOUT_SECONDS": "3"},
            clear=True,
        ):
            client = TavilyClient.from_env()
        self.assertEqual(client.base_url, "https://proxy.example.org")
        self.assertEqual(client.timeout, 3.0)


if __name__ == "__main__":
    unittest.main()

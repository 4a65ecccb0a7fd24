from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))


@pytest.fixture(scope="session", autouse=True)
def patch_tavily_env():
    """
    Provide a dummy API key for the test session.
    """
    # Only set a dummy key if one is not provided by the environment/tests.
    if not os.environ.get("TAVILY_API_KEY", "").strip():
        os.environ["TAVILY_API_KEY"] = "test_api_key"
    yield

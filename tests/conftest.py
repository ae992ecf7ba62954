"""Test configuration."""

import os
from collections.abc import Generator
from pathlib import Path
from typing import List

import pytest
from dotenv import load_dotenv

project_dir = Path(__file__).parent.parent

# Test-specific configuration; explicit env vars still win
env_test_file = project_dir / ".env.test"
if env_test_file.exists():
    load_dotenv(env_test_file, override=False)

os.environ.setdefault("SITE_URL", "https://shop.example")
os.environ.setdefault("DEFAULT_LOCALE", "sv-se")
os.environ.setdefault("SUPPORTED_LOCALES", '["sv-se", "en-us", "da-dk"]')
os.environ.setdefault(
    "LANGUAGE_NAMES", '{"sv-se": "Svenska", "en-us": "English", "da-dk": "Dansk"}'
)
os.environ.setdefault("CMS_REPOSITORY_NAME", "storefront-test")
os.environ.setdefault("JSON_LOGS", "false")

from storefront.core.logging import configure_logging  # noqa: E402

fixture = pytest.fixture


@fixture(scope="session")
def project_root() -> Path:
    """Get the project root directory."""
    return project_dir


pytest_plugins: List[str] = [
    "tests.fixtures.cms",
    "tests.fixtures.payments",
    "tests.fixtures.api",
]


@fixture(autouse=True)
def setup_test_logging() -> Generator[None, None, None]:
    """Configure logging for tests."""
    configure_logging(testing=True, level="debug")
    yield

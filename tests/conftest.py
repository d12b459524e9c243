"""Shared fixtures for agent-smith tests."""

import sys
from pathlib import Path

import pytest

# Add project root to path so we can import modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import Config
from manifest import ManifestFetcher


BASE_URL = "https://raw.example.com/org/updates/main"
TOKEN = "ghp_test"


@pytest.fixture
def core_manifest():
    """Sample core.json contents."""
    return {
        "current": "6.5",
        "locale": "de_DE",
        "package": "https://example.com/wordpress-6.5.zip",
    }


@pytest.fixture
def plugins_manifest():
    """Sample plugins.json contents."""
    return {
        "my-plugin": {
            "slug": "my-plugin",
            "new_version": "2.0",
            "package": "https://example.com/my-plugin-2.0.zip",
        },
        "empty-plugin": {},
    }


@pytest.fixture
def fetcher():
    """Fetcher configured against the test repository."""
    return ManifestFetcher(BASE_URL, TOKEN)


@pytest.fixture
def sample_config(tmp_path):
    """Pre-configured Config instance for testing."""
    return Config(
        base_url=BASE_URL,
        token=TOKEN,
        options_file=tmp_path / "options.json",
        transients_file=tmp_path / "transients.json",
        installed_version="6.4",
        locale="en_US",
        mysql_version="8.0.36",
    )


@pytest.fixture
def config_toml_content(tmp_path):
    """Sample config.toml content."""
    return f"""
options_file = "{tmp_path / 'site-options.json'}"
transients_file = "{tmp_path / 'site-transients.json'}"
installed_version = "6.4.3"
locale = "fr_FR"
mysql_version = "10.11.6-MariaDB"
"""

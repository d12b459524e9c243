"""Settings surface: sanitising, saving and describing the repository settings."""

import re
from urllib.parse import urlparse

from config import Config
from store import OPTION_REPO, OPTION_TOKEN, OptionStore


ALLOWED_URL_SCHEMES = ("http", "https")

TOKEN_MASK = "********"

FIELD_LABELS = {
    OPTION_REPO: "GitHub Repo URL",
    OPTION_TOKEN: "GitHub Personal Access Token (PAT)",
}

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")
_UNSAFE_URL_RE = re.compile(r"[\x00-\x20\x7f]")


def sanitize_repo_url(value: str) -> str:
    """Return value if it is an http(s) URL with a host, otherwise ''."""
    value = value.strip()
    if not value:
        return ""

    if _UNSAFE_URL_RE.search(value):
        return ""

    try:
        parsed = urlparse(value)
        parsed.port  # raises on a non-numeric or out-of-range port
    except ValueError:
        return ""

    if parsed.scheme.lower() not in ALLOWED_URL_SCHEMES or not parsed.netloc:
        return ""

    return value


def sanitize_token(value: str) -> str:
    """Strip tags, line breaks and tabs; collapse whitespace."""
    value = _TAG_RE.sub("", value)
    value = _WHITESPACE_RE.sub(" ", value)
    return value.strip()


def update_settings(
    store: OptionStore,
    repo_url: str | None = None,
    token: str | None = None,
) -> None:
    """Save sanitised settings. Fields passed as None are left unchanged."""
    if repo_url is not None:
        store.set(OPTION_REPO, sanitize_repo_url(repo_url))
    if token is not None:
        store.set(OPTION_TOKEN, sanitize_token(token))


def describe_settings(store: OptionStore) -> dict[str, str]:
    """Field label -> display value. The token itself is never shown."""
    token = store.get(OPTION_TOKEN, "")
    return {
        FIELD_LABELS[OPTION_REPO]: store.get(OPTION_REPO, ""),
        FIELD_LABELS[OPTION_TOKEN]: TOKEN_MASK if token else "",
    }


def missing_config_notice(config: Config) -> str | None:
    """Notice shown while the repository URL or token is unset."""
    if config.is_configured:
        return None

    return (
        "Agent Smith: please set the GitHub repo URL and token "
        "(agent-smith configure --repo-url URL --token TOKEN)."
    )

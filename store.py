"""JSON-file key-value stores standing in for the host's options and transients."""

import json
from pathlib import Path
from typing import Any

from logging_setup import get_logger


OPTION_REPO = "agent_smith_github_repo"
OPTION_TOKEN = "agent_smith_github_token"

TRANSIENT_CORE = "update_core"
TRANSIENT_PLUGINS = "update_plugins"
TRANSIENT_THEMES = "update_themes"


class JsonStore:
    """String-keyed store persisted as a single JSON object.

    Every write rewrites the whole file, so concurrent writers race and
    the last one wins.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            get_logger().warning("Ignoring unreadable store %s: %s", self.path, e)
            return {}

        if not isinstance(data, dict):
            get_logger().warning("Ignoring store %s: not a JSON object", self.path)
            return {}

        return data

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> bool:
        """Remove key. Returns False if it was not present."""
        data = self._read()
        if key not in data:
            return False
        del data[key]
        self._write(data)
        return True


class OptionStore(JsonStore):
    """Persistent settings (repository URL, access token)."""


class TransientStore(JsonStore):
    """Site transients with an in-process object cache over the file."""

    def __init__(self, path: Path):
        super().__init__(path)
        self._object_cache: dict[str, Any] = {}

    def get(self, key: str, default: Any = None) -> Any:
        if key in self._object_cache:
            return self._object_cache[key]

        value = super().get(key, default)
        if value is not default:
            self._object_cache[key] = value
        return value

    def set(self, key: str, value: Any) -> None:
        super().set(key, value)
        self._object_cache[key] = value

    def delete(self, key: str) -> bool:
        self._object_cache.pop(key, None)
        return super().delete(key)

    def flush_object_cache(self) -> None:
        self._object_cache.clear()

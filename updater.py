"""Update check cycle: fetch manifests, synthesise transients, store them."""

import time
from dataclasses import dataclass
from typing import Any

from config import Config
from logging_setup import get_logger
from manifest import ManifestFetcher
from store import TRANSIENT_CORE, TRANSIENT_PLUGINS, TRANSIENT_THEMES, TransientStore
from transient import CoreTransient, synthesize_addon_updates, synthesize_core


ADDON_TRANSIENTS = {
    "plugin": TRANSIENT_PLUGINS,
    "theme": TRANSIENT_THEMES,
}


@dataclass
class CheckResult:
    core: CoreTransient
    plugins: dict[str, Any]
    themes: dict[str, Any]


class UpdateChecker:
    def __init__(
        self,
        config: Config,
        fetcher: ManifestFetcher | None = None,
        transients: TransientStore | None = None,
    ):
        self.config = config
        self.fetcher = fetcher or config.fetcher()
        self.transients = transients or TransientStore(config.transients_file)

    def check_core(self) -> CoreTransient:
        """Rebuild and store the core update transient."""
        transient = synthesize_core(
            self.fetcher,
            self.config.installed_version,
            self.config.locale,
            mysql_version=self.config.mysql_version,
        )
        self.transients.set(TRANSIENT_CORE, transient.to_dict())
        get_logger().debug("Core: %s %s", transient.response, transient.current)
        return transient

    def check_addons(self, kind: str, force_refresh: bool = False) -> dict[str, Any]:
        """Merge manifest entries into the cached plugin or theme transient.

        With force_refresh the cached transient and the object cache are
        discarded first, so only entries from this fetch remain.
        """
        if kind not in ADDON_TRANSIENTS:
            raise ValueError(f"Unknown addon kind: {kind!r}")
        key = ADDON_TRANSIENTS[kind]

        if force_refresh:
            self.transients.delete(key)
            self.transients.flush_object_cache()

        cached = self.transients.get(key)
        if not isinstance(cached, dict):
            cached = {}
        response = cached.get("response")
        if not isinstance(response, dict):
            response = {}

        response = synthesize_addon_updates(self.fetcher, kind, response)

        cached["response"] = response
        cached["last_checked"] = int(time.time())
        self.transients.set(key, cached)

        get_logger().debug("%s updates: %d", kind.capitalize(), len(response))
        return response

    def run(self, force_refresh: bool = False) -> CheckResult:
        return CheckResult(
            core=self.check_core(),
            plugins=self.check_addons("plugin", force_refresh=force_refresh),
            themes=self.check_addons("theme", force_refresh=force_refresh),
        )

"""Update transient synthesis for agent-smith.

Turns the parsed manifests into the structures the host's updater reads:
a complete core transient, and a slug -> update-info mapping for plugins
and themes.
"""

import platform
from dataclasses import asdict, dataclass, field
from typing import Any

from manifest import MANIFEST_FILES, ManifestFetcher


RESPONSE_UPGRADE = "upgrade"
RESPONSE_LATEST = "latest"

ADDON_KINDS = ("plugin", "theme")


@dataclass
class Packages:
    full: str
    partial: str = ""
    new_bundled: str = ""
    no_content: str = ""


@dataclass
class CoreUpdate:
    response: str
    current: str
    locale: str
    package: str
    packages: Packages

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class CoreTransient:
    current: str
    locale: str
    version_checked: str
    php_version: str
    mysql_version: str
    updates: list[CoreUpdate] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)

    @property
    def response(self) -> str:
        """Response of the single update entry."""
        return self.updates[0].response


def _string_field(manifest: dict, key: str) -> str | None:
    value = manifest.get(key)
    return value if isinstance(value, str) else None


def build_core_update(
    manifest: Any,
    installed_version: str,
    locale: str,
) -> CoreUpdate:
    """Build the core update entry, falling back to "latest" on bad input."""
    current = manifest.get("current") if isinstance(manifest, dict) else None

    if current and isinstance(current, str):
        update_locale = _string_field(manifest, "locale")
        package = _string_field(manifest, "package")
        response = RESPONSE_UPGRADE
        locale = update_locale if update_locale is not None else locale
        package = package if package is not None else ""
    else:
        response = RESPONSE_LATEST
        current = installed_version
        package = ""

    return CoreUpdate(
        response=response,
        current=current,
        locale=locale,
        package=package,
        packages=Packages(full=package),
    )


def synthesize_core(
    fetcher: ManifestFetcher,
    installed_version: str,
    locale: str,
    mysql_version: str | None = None,
) -> CoreTransient:
    """Build the core update transient from core.json.

    A missing, unreachable or malformed manifest degrades to a well-formed
    "latest" response for the installed version.
    """
    manifest = fetcher.fetch(MANIFEST_FILES["core"])
    update = build_core_update(manifest, installed_version, locale)

    return CoreTransient(
        updates=[update],
        current=update.current,
        locale=update.locale,
        version_checked=update.current,
        php_version=platform.python_version(),
        mysql_version=mysql_version or "",
    )


def synthesize_addon_updates(
    fetcher: ManifestFetcher,
    kind: str,
    response: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Copy plugin or theme entries from the manifest into response.

    Each slug with non-empty data is copied verbatim. Slugs the manifest
    does not mention are left as they are in response.
    """
    if kind not in ADDON_KINDS:
        raise ValueError(f"Unknown addon kind: {kind!r}")

    if response is None:
        response = {}

    manifest = fetcher.fetch(MANIFEST_FILES[kind])
    if not isinstance(manifest, dict):
        return response

    for slug, data in manifest.items():
        if data:
            response[slug] = data

    return response

"""Configuration loading for agent-smith."""

import tomllib
from dataclasses import dataclass
from pathlib import Path

from manifest import ManifestFetcher
from store import OPTION_REPO, OPTION_TOKEN, OptionStore


DEFAULT_CONFIG_PATH = Path("config.toml")

DEFAULTS = {
    "options_file": "./options.json",
    "transients_file": "./transients.json",
    "installed_version": "0.0.0",
    "locale": "en_US",
    "mysql_version": "",
}


@dataclass
class Config:
    base_url: str
    token: str
    options_file: Path
    transients_file: Path
    installed_version: str
    locale: str
    mysql_version: str

    @property
    def is_configured(self) -> bool:
        """Both repository URL and token are set."""
        return bool(self.base_url) and bool(self.token)

    def fetcher(self) -> ManifestFetcher:
        return ManifestFetcher(self.base_url, self.token)

    @classmethod
    def load(
        cls,
        config_path: Path | None = None,
        installed_version_override: str | None = None,
        locale_override: str | None = None,
    ) -> "Config":
        """Load configuration from TOML file and the option store.

        Repository URL and token come from the option store, falling back
        to the TOML file. Other values: command-line overrides, then the
        TOML file, then defaults.
        """
        config_data = dict(DEFAULTS)

        path = config_path or DEFAULT_CONFIG_PATH
        if path.exists():
            with open(path, "rb") as f:
                file_config = tomllib.load(f)
                config_data.update(file_config)

        options_file = Path(config_data["options_file"]).expanduser().resolve()
        options = OptionStore(options_file)

        base_url = options.get(OPTION_REPO) or config_data.get("base_url", "")
        token = options.get(OPTION_TOKEN) or config_data.get("token", "")

        if installed_version_override:
            config_data["installed_version"] = installed_version_override
        if locale_override:
            config_data["locale"] = locale_override

        return cls(
            base_url=str(base_url),
            token=str(token),
            options_file=options_file,
            transients_file=Path(config_data["transients_file"]).expanduser().resolve(),
            installed_version=str(config_data["installed_version"]),
            locale=str(config_data["locale"]),
            mysql_version=str(config_data["mysql_version"]),
        )

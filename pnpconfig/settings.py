# pnpconfig/settings.py
"""
Settings for locating configuration documents.

Defaults can be overridden with environment variables:

    PNPCONFIG_HOME           Configuration directory (default ~/.pnpconfig)
    PNPCONFIG_MACHINE_FILE   Machine document filename (default machine.yaml)
    PNPCONFIG_PACKAGES_FILE  Package catalog filename (default packages.yaml)
    PNPCONFIG_PARTS_FILE     Part catalog filename (default parts.yaml)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_CONFIG_DIR = Path("~/.pnpconfig")
MACHINE_FILENAME = "machine.yaml"
PACKAGES_FILENAME = "packages.yaml"
PARTS_FILENAME = "parts.yaml"


@dataclass
class Settings:
    """Where the configuration documents live."""
    config_dir: Path = field(default_factory=lambda: DEFAULT_CONFIG_DIR.expanduser())
    machine_filename: str = MACHINE_FILENAME
    packages_filename: str = PACKAGES_FILENAME
    parts_filename: str = PARTS_FILENAME

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables."""
        env = os.environ if environ is None else environ
        config_dir = env.get("PNPCONFIG_HOME")
        return cls(
            config_dir=Path(config_dir).expanduser() if config_dir else DEFAULT_CONFIG_DIR.expanduser(),
            machine_filename=env.get("PNPCONFIG_MACHINE_FILE", MACHINE_FILENAME),
            packages_filename=env.get("PNPCONFIG_PACKAGES_FILE", PACKAGES_FILENAME),
            parts_filename=env.get("PNPCONFIG_PARTS_FILE", PARTS_FILENAME),
        )

    def machine_path(self, directory: Path | str | None = None) -> Path:
        return Path(directory or self.config_dir) / self.machine_filename

    def packages_path(self, directory: Path | str | None = None) -> Path:
        return Path(directory or self.config_dir) / self.packages_filename

    def parts_path(self, directory: Path | str | None = None) -> Path:
        return Path(directory or self.config_dir) / self.parts_filename

# /sigverify/src/config_loader.py

"""
Module: config_loader.py
Purpose: Load and validate verifier configuration from config.ini.
Consumes: $SIGVERIFY_CONFIG, else /etc/sigverify/config.ini
Provides: A Config class with typed access to verifier and logging settings.
Failure Mode: Missing file falls back to defaults; malformed values raise ValueError.
"""

import configparser
import os
from pathlib import Path

from errors import UnknownSchemeError
from schemes import VerificationScheme, parse_scheme


CONFIG_PATH = "/etc/sigverify/config.ini"

DEFAULTS = {
    "VERIFIER": {
        "enabled_schemes": ",".join(s.value for s in VerificationScheme),
        "allow_ambiguous": "true",
    },
    "LOGGING": {
        "level": "INFO",
        "log_file": "",
        "backup_count": "7",
    },
}


def config_path() -> Path:
    return Path(os.environ.get("SIGVERIFY_CONFIG", CONFIG_PATH))


class Config:
    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path is not None else config_path()
        self._parser = configparser.ConfigParser()
        self._load_config()
        self._bind_all()

    def _load_config(self):
        self._parser.read_dict(DEFAULTS)
        if self.path.is_file():
            self._parser.read(self.path)

    def _bind_all(self):
        # --- VERIFIER ---
        self.enabled_schemes = self._get_schemes("VERIFIER", "enabled_schemes")
        self.allow_ambiguous = self._get_bool("VERIFIER", "allow_ambiguous")

        # --- LOGGING ---
        self.log_level = self._get("LOGGING", "level").upper()
        log_file = self._get("LOGGING", "log_file").strip()
        self.log_file = Path(log_file).expanduser().resolve() if log_file else None
        self.log_backup_count = self._get_int("LOGGING", "backup_count")

    def is_enabled(self, scheme: VerificationScheme) -> bool:
        return scheme in self.enabled_schemes

    # Internal retrieval methods
    def _get(self, section, key):
        return self._parser.get(section, key)

    def _get_int(self, section, key):
        return self._parser.getint(section, key)

    def _get_bool(self, section, key):
        return self._parser.getboolean(section, key)

    def _get_schemes(self, section, key):
        names = [n for n in self._get(section, key).split(",") if n.strip()]
        try:
            return frozenset(parse_scheme(n) for n in names)
        except UnknownSchemeError as e:
            raise ValueError(f"[{section}] {key}: {e}")


# Global access object
CONFIG = Config()


def reload_config(path: Path | str | None = None) -> Config:
    """Re-read configuration into the global CONFIG (for tests and reconfiguration)."""
    global CONFIG
    CONFIG = Config(path)
    return CONFIG

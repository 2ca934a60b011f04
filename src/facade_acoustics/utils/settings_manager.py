"""
Settings Manager - Runtime settings read from environment variables
"""

import os

from ..calculations.errors import ConfigurationError
from ..calculations.iso_constants import DEFAULT_DIRECTIVITY_N


class SettingsManager:
    """Manages engine settings from the process environment"""

    # Settings keys
    KEY_CATALOG_PATH = "FACADE_ACOUSTICS_CATALOG_PATH"
    KEY_DATABASE_PATH = "FACADE_ACOUSTICS_DATABASE_PATH"
    KEY_DIRECTIVITY_N = "FACADE_ACOUSTICS_DIRECTIVITY_N"

    def __init__(self, environ=None):
        """
        Initialize the settings manager

        Args:
            environ: Mapping to read from instead of os.environ (tests)
        """
        self.environ = os.environ if environ is None else environ

    def _value(self, key):
        value = self.environ.get(key)
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    def get_catalog_path(self):
        """
        Get the JSON catalog override, or None for the bundled catalog

        Returns:
            str or None: Path to a catalog file

        Raises:
            ConfigurationError: if the configured file does not exist
        """
        path = self._value(self.KEY_CATALOG_PATH)
        if path and not os.path.exists(path):
            raise ConfigurationError(f"{self.KEY_CATALOG_PATH} points to a missing file: {path}")
        return path

    def get_database_path(self):
        """
        Get the SQLite catalog store path, or None if not set

        Returns:
            str or None: Database path or SQLAlchemy URL
        """
        return self._value(self.KEY_DATABASE_PATH)

    def get_directivity_n(self):
        """Default exponent of the cos^N directivity model"""
        raw = self._value(self.KEY_DIRECTIVITY_N)
        if raw is None:
            return DEFAULT_DIRECTIVITY_N
        try:
            value = float(raw)
        except ValueError:
            raise ConfigurationError(f"{self.KEY_DIRECTIVITY_N} must be a number, got {raw!r}") from None
        if value <= 0:
            raise ConfigurationError(f"{self.KEY_DIRECTIVITY_N} must be positive, got {value}")
        return value

    def is_using_custom_catalog(self):
        return self._value(self.KEY_CATALOG_PATH) is not None


# Global instance
_settings_manager = None


def get_settings_manager():
    """Get the global settings manager instance"""
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager()
    return _settings_manager

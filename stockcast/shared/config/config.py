"""Process-wide access to the stockcast settings."""
import copy
from typing import Any, Optional

from .settings import Settings
from ..exceptions import ConfigurationError


class Config:
    """Holds the one ``Settings`` instance shared by the CLI and web app."""

    _instance: Optional['Config'] = None
    _settings: Optional[Settings] = None

    def __new__(cls) -> 'Config':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def settings(self) -> Settings:
        """Current settings, loaded from the environment on first access."""
        if self._settings is None:
            self.reload()
        return self._settings

    def reload(self) -> None:
        """Discard overrides and re-read the environment."""
        settings = Settings.from_env()
        settings.validate()
        self._settings = settings

    def update_settings(self, **overrides: Any) -> None:
        """Override settings addressed as ``section.setting`` or ``setting``.

        ``update_settings(**{'forecast.random_seed': 7})``

        Overrides are applied to a copy and only take effect if every key
        resolves and the result validates; otherwise ``ConfigurationError``
        is raised and the current settings are left untouched.
        """
        updated = copy.deepcopy(self.settings)
        for key, value in overrides.items():
            target, name = self._resolve(updated, key)
            setattr(target, name, value)

        updated.validate()
        self._settings = updated

    @staticmethod
    def _resolve(settings: Settings, key: str):
        parts = key.split('.')
        if len(parts) == 1:
            target, name = settings, parts[0]
        elif len(parts) == 2:
            section, name = parts
            target = getattr(settings, section, None)
            if target is None or not hasattr(target, '__dataclass_fields__'):
                raise ConfigurationError(f"Unknown settings section: {section}", {'key': key})
        else:
            raise ConfigurationError(f"Invalid settings key: {key}", {'key': key})

        if name not in getattr(target, '__dataclass_fields__', {}):
            raise ConfigurationError(f"Unknown setting: {key}", {'key': key})
        return target, name


def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()


def get_settings() -> Settings:
    """Get the current settings."""
    return Config().settings

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


MODE_ENV_VAR = "APP_ENV"
# Older .env files written for the Node.js service still carry NODE_ENV.
MODE_FALLBACK_ENV_VAR = "NODE_ENV"
LOG_LEVEL_ENV_VAR = "LOG_LEVEL"

DEFAULT_MODE = "development"

RECOGNIZED_KEYS = (MODE_ENV_VAR, MODE_FALLBACK_ENV_VAR, LOG_LEVEL_ENV_VAR)


@dataclass(frozen=True, slots=True)
class StartupContext:
    """Read-only snapshot of the configuration available at process launch.

    Keys are case-sensitive. Lookups are total: an unset or empty value
    resolves to the caller's default and never raises.
    """

    values: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def resolve(self, key: str, default: str = "") -> str:
        value = self.values.get(key)
        if value is None or value == "":
            return default
        return value

    @property
    def mode(self) -> str:
        return self.resolve(MODE_ENV_VAR, self.resolve(MODE_FALLBACK_ENV_VAR, DEFAULT_MODE))

    @property
    def is_development(self) -> bool:
        return self.mode == DEFAULT_MODE

    @property
    def log_level(self) -> str:
        """LOG_LEVEL when set, otherwise DEBUG in development and INFO elsewhere."""

        return self.resolve(LOG_LEVEL_ENV_VAR, "DEBUG" if self.is_development else "INFO").upper()

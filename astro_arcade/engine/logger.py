"""Channelled logging for the arcade.

Every subsystem writes through a named channel (``physics``, ``collisions``,
``spawner``, ``progression``, ``input``) that can be switched on or off from
the ``logChannels`` block of ``settings.json`` without touching log levels.
"""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional

ROOT_LOGGER = "astro_arcade"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

DEFAULT_CHANNELS = {
    "physics": False,
    "collisions": True,
    "spawner": True,
    "progression": True,
    "input": False,
}


def _parse_level(value: Any) -> int:
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value).upper())
    return level if isinstance(level, int) else logging.INFO


@dataclass
class LoggerConfig:
    level: int = logging.INFO
    channels: Dict[str, bool] = field(default_factory=lambda: dict(DEFAULT_CHANNELS))

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> "LoggerConfig":
        """Build a config from the parsed ``settings.json`` mapping."""

        channels = dict(DEFAULT_CHANNELS)
        overrides = settings.get("logChannels") or {}
        if isinstance(overrides, Mapping):
            channels.update({str(name): bool(enabled) for name, enabled in overrides.items()})
        return cls(level=_parse_level(settings.get("logLevel", "INFO")), channels=channels)


class ChannelLogger:
    """A named channel that drops records while it is disabled."""

    def __init__(self, name: str, logger: logging.Logger, enabled: bool) -> None:
        self.name = name
        self.enabled = enabled
        self._logger = logger

    def _emit(self, level: int, msg: str, args: tuple, kwargs: Dict[str, Any]) -> None:
        if self.enabled and self._logger.isEnabledFor(level):
            self._logger.log(level, msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._emit(logging.DEBUG, msg, args, kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._emit(logging.INFO, msg, args, kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._emit(logging.WARNING, msg, args, kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._emit(logging.ERROR, msg, args, kwargs)


class GameLogger:
    """Owns the ``astro_arcade`` logger tree and its channels."""

    def __init__(self, config: Optional[LoggerConfig] = None) -> None:
        config = config or LoggerConfig()
        logging.basicConfig(level=config.level, format=LOG_FORMAT, stream=sys.stdout)
        self.root = logging.getLogger(ROOT_LOGGER)
        self.root.setLevel(config.level)
        self._channels: Dict[str, ChannelLogger] = {}
        for name, enabled in config.channels.items():
            self._channels[name] = self._make_channel(name, enabled)

    def _make_channel(self, name: str, enabled: bool) -> ChannelLogger:
        return ChannelLogger(name, self.root.getChild(name), enabled)

    def channel(self, name: str) -> ChannelLogger:
        # Channels not named in the config stay silent until enabled.
        if name not in self._channels:
            self._channels[name] = self._make_channel(name, False)
        return self._channels[name]

    def set_enabled(self, name: str, enabled: bool) -> None:
        self.channel(name).enabled = enabled

    def channels(self) -> Iterable[str]:
        return self._channels.keys()


def init_logger(settings: Optional[Mapping[str, Any]] = None) -> GameLogger:
    return GameLogger(LoggerConfig.from_settings(settings or {}))


__all__ = ["DEFAULT_CHANNELS", "ChannelLogger", "GameLogger", "LoggerConfig", "init_logger"]

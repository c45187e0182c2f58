from typing import Any, NotRequired, TypedDict
import logging
from vdfcodec.utils import resolve_config


class LoggerConfig(TypedDict):
    name: NotRequired[str]
    is_enabled: NotRequired[bool]
    level: NotRequired[int]
    format: NotRequired[str]


class LoggerConfigRequired(TypedDict):
    name: str
    is_enabled: bool
    level: int
    format: str


DEFAULT_LOGGER_CONFIG: LoggerConfigRequired = {
    "name": "vdfcodec",
    "is_enabled": True,
    "level": logging.DEBUG,
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}


class Logger:
    """Per-component handle on a named logger.

    The on/off switch belongs to the handle, not to the process-wide
    ``logging.Logger``: a disabled handle drops its records and never touches
    the shared logger, so components built with different settings (or a host
    application's own logging setup) don't interfere with each other.
    """

    def __init__(self, config: LoggerConfig | None = None):
        self.config = resolve_config(config or {}, DEFAULT_LOGGER_CONFIG)
        self.is_enabled = self.config["is_enabled"]
        self.logger = logging.getLogger(self.config["name"])
        if self.is_enabled:
            self.set_configuration()

    def set_configuration(self):
        if self.logger.getEffectiveLevel() > self.config["level"]:
            self.logger.setLevel(self.config["level"])
        # an application that already routes these records keeps its handlers
        if not self.logger.hasHandlers():
            self.formatter = logging.Formatter(self.config["format"])
            self.ch = logging.StreamHandler()
            self.ch.setFormatter(self.formatter)
            self.logger.addHandler(self.ch)

    def debug(self, msg: str, *args: Any) -> None:
        if self.is_enabled:
            self.logger.debug(msg, *args)

    def info(self, msg: str, *args: Any) -> None:
        if self.is_enabled:
            self.logger.info(msg, *args)


def get_logger(name: str, is_enabled: bool) -> Logger:
    """Return a handle on the component logger ``name``, switched on or off."""
    return Logger(config={"name": name, "is_enabled": is_enabled})

"""Logging for the shortlink service.

All loggers live under ``shortlink``. Components log through a child named
after them (``shortlink.database``, ``shortlink.ratelimit`` ...) so each can be
tuned with LOG_LEVELS, e.g. ``database=DEBUG,web=WARNING``.
"""

import json
import logging
import sys
from typing import Dict, Optional

ROOT_LOGGER = "shortlink"

COMPONENTS = ("database", "ratelimit", "resolver", "service", "web")


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "pid": record.process,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def parse_component_levels(spec: Optional[str]) -> Dict[str, int]:
    """Parse ``component=LEVEL`` pairs separated by commas.

    Raises:
        ValueError: On an unknown component or level name
    """
    levels: Dict[str, int] = {}
    if not spec:
        return levels

    for item in spec.split(","):
        item = item.strip()
        if not item:
            continue
        component, _, level_name = item.partition("=")
        component = component.strip().lower()
        if component not in COMPONENTS:
            raise ValueError(f"Unknown log component: {component!r}")
        level = logging.getLevelName(level_name.strip().upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level for {component}: {level_name!r}")
        levels[component] = level
    return levels


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
    component_levels: Optional[str] = None,
) -> logging.Logger:
    """Configure the ``shortlink`` logger tree.

    Handlers are attached once, to ``shortlink``; calling again replaces them.
    Component loggers get their level from component_levels, otherwise they
    inherit ``level``.

    Args:
        level: Level for the service as a whole
        log_file: Optional file receiving the same records as stdout
        json_format: Emit one JSON object per line
        component_levels: Overrides such as ``database=DEBUG,ratelimit=WARNING``

    Returns:
        The ``shortlink`` logger
    """
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    if json_format:
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s [PID:%(process)d] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    overrides = parse_component_levels(component_levels)
    for component in COMPONENTS:
        get_logger(component).setLevel(overrides.get(component, logging.NOTSET))

    return root


def get_logger(component: Optional[str] = None) -> logging.Logger:
    """Logger for a service component, or the ``shortlink`` logger itself."""
    if not component:
        return logging.getLogger(ROOT_LOGGER)
    return logging.getLogger(f"{ROOT_LOGGER}.{component}")

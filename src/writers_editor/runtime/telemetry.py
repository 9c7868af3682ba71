"""Telemetry services for the editor, built on the ``logging`` package.

The rest of the package only touches four entry points:

``configure(...)`` -- pick a preset or an explicit ``TelemetryConfig``
``get_logger(name)`` -- fetch a logger under the ``writers_editor`` tree
``record_event(name, ...)`` -- emit a structured event at a chosen level
``span(name, ...)`` -- time a block and optionally tag it as a component

The full-screen editor owns the terminal while it runs, so the ``session``
preset keeps console output off and only writes to a log file when one is
configured.
"""

from __future__ import annotations

import json
import logging
import os
import time
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, List, Optional

from rich.logging import RichHandler

ENV_PREFIX = "WRITERS_EDITOR_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "writers_editor")
DEFAULT_LOG_FILE = os.getenv(f"{ENV_PREFIX}LOG_FILE", "")

PRESETS = ("development", "session", "performance")

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_ACTIVE_CONFIG: Optional["TelemetryConfig"] = None


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> str:
    return " ".join(f"{key}={_stringify(value)}" for key, value in data.items())


def _resolve_level(level: Optional[str] = None) -> str:
    return (level or _env("LOG_LEVEL") or "INFO").upper()


@dataclass(frozen=True)
class TelemetryConfig:
    """Where log records go and how they look."""

    level: str = "INFO"
    console: bool = True
    colored: bool = True
    json_format: bool = False
    log_file: Optional[str] = None
    profiling: bool = True


class JsonFormatter(logging.Formatter):
    """One JSON object per line, with event payloads flattened in."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(getattr(record, "telemetry", {}))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _build_preset_config(
    preset: str, *, log_file: Optional[str] = None, level: Optional[str] = None
) -> TelemetryConfig:
    key = preset.lower()
    target = log_file or _env("LOG_FILE") or DEFAULT_LOG_FILE or None

    if key == "development":
        return TelemetryConfig(
            level=_resolve_level(level or "DEBUG"),
            console=True,
            colored=True,
            log_file=target,
        )
    if key == "session":
        return TelemetryConfig(
            level=_resolve_level(level), console=False, log_file=target
        )
    if key == "performance":
        return TelemetryConfig(
            level=_resolve_level(level or "DEBUG"),
            console=False,
            json_format=True,
            log_file=target or "writers_editor-performance.log",
        )
    raise ValueError(f"Unknown preset '{preset}'.")


def _build_default_config() -> TelemetryConfig:
    return TelemetryConfig(
        level=_resolve_level(),
        console=not _env_flag("DISABLE_CONSOLE", False),
        colored=not _env_flag("NO_COLOR", False),
        json_format=_env_flag("LOG_JSON", False),
        log_file=_env("LOG_FILE") or DEFAULT_LOG_FILE or None,
    )


def _build_handlers(config: TelemetryConfig) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    text_formatter = logging.Formatter(TEXT_FORMAT)

    if config.console:
        if config.colored and not config.json_format:
            handlers.append(RichHandler(show_path=False, rich_tracebacks=True))
        else:
            console = logging.StreamHandler()
            console.setFormatter(
                JsonFormatter() if config.json_format else text_formatter
            )
            handlers.append(console)

    if config.log_file:
        file_handler = logging.FileHandler(
            config.log_file, encoding="utf-8", delay=True
        )
        file_handler.setFormatter(
            JsonFormatter() if config.json_format else text_formatter
        )
        handlers.append(file_handler)

    if not handlers:
        handlers.append(logging.NullHandler())
    return handlers


def configure(
    *,
    config: Optional[TelemetryConfig] = None,
    preset: Optional[str] = None,
    log_file: Optional[str] = None,
    level: Optional[str] = None,
) -> TelemetryConfig:
    """Swap the active configuration and rebuild the package handlers.

    ``config`` and ``preset`` are mutually exclusive. ``log_file`` and
    ``level`` only apply to presets.
    """

    global _ACTIVE_CONFIG
    if config and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = _build_preset_config(preset, log_file=log_file, level=level)
    elif config is None:
        config = _build_default_config()

    root = logging.getLogger(DEFAULT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in _build_handlers(config):
        root.addHandler(handler)
    root.setLevel(config.level)
    root.propagate = False

    _ACTIVE_CONFIG = config
    return config


def active_config() -> TelemetryConfig:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = configure()
    return _ACTIVE_CONFIG


def quiet_console() -> TelemetryConfig:
    """Drop console output while keeping the active level and log file.

    Called before a full-screen host takes over the terminal.
    """

    current = active_config()
    if not current.console:
        return current
    return configure(config=replace(current, console=False))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger inside the ``writers_editor`` hierarchy."""

    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name != DEFAULT_LOGGER_NAME and not logger_name.startswith(
        f"{DEFAULT_LOGGER_NAME}."
    ):
        logger_name = f"{DEFAULT_LOGGER_NAME}.{logger_name}"
    return logging.getLogger(logger_name)


def _level_number(level: Any) -> int:
    if isinstance(level, int):
        return level
    number = logging.getLevelName(str(level).upper())
    if not isinstance(number, int):
        raise ValueError(f"Unsupported log level '{level}'.")
    return number


def record_event(
    name: str,
    *,
    level: str | int = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    log = get_logger(logger_name)
    payload = {"event": name, **(data or {})}
    log.log(
        _level_number(level),
        "event::%s %s",
        name,
        _format_pairs(payload),
        extra={"telemetry": {key: _stringify(v) for key, v in payload.items()}},
    )


@dataclass
class SpanHandle:
    """Yielded by ``span`` so callers can attach results to the span."""

    logger: logging.Logger
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def _emit(
        self, level: int, message: str, extra: Optional[Dict[str, Any]] = None
    ) -> None:
        payload = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        if extra:
            payload.update({key: _stringify(val) for key, val in extra.items()})
        self.logger.log(
            level,
            "%s %s",
            message,
            _format_pairs(payload),
            extra={"telemetry": payload},
        )

    def fail(self, reason: str) -> None:
        self._emit(logging.ERROR, "span::fail", {"reason": reason})


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Time a block; ``component=True`` tags it with ``name`` as component.

    ``metadata`` is copied onto the yielded handle and reported with the
    closing ``span::end`` record when profiling is on.
    """

    log = get_logger(logger_name)
    component_name = None
    if component is True:
        component_name = name
    elif isinstance(component, str):
        component_name = component

    handle = SpanHandle(
        logger=log,
        span_name=name,
        component_name=component_name,
        metadata={key: _stringify(value) for key, value in (metadata or {}).items()},
    )
    started = time.perf_counter()
    try:
        yield handle
    except Exception as exc:
        handle.fail(str(exc))
        raise
    finally:
        if active_config().profiling and log.isEnabledFor(logging.DEBUG):
            elapsed_ms = (time.perf_counter() - started) * 1000.0
            handle._emit(
                logging.DEBUG, "span::end", {"duration_ms": f"{elapsed_ms:.3f}"}
            )


configure()
logger = get_logger()

__all__ = [
    "PRESETS",
    "JsonFormatter",
    "SpanHandle",
    "TelemetryConfig",
    "active_config",
    "configure",
    "get_logger",
    "quiet_console",
    "record_event",
    "span",
    "logger",
]

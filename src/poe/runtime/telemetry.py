"""telelog wiring for poe.

Standard output is where the user edits, so nothing reaches the console
unless ``POE_LOG_CONSOLE=1`` is set. ``POE_LOG_FILE`` sends records to a file
and ``POE_LOG_LEVEL`` picks the threshold (``WARNING`` by default).
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

DEFAULT_LOGGER_NAME = "poe"

# preset -> (min level, console, json, profiling, fallback log file)
_PRESET_TABLE: Dict[str, Tuple[str, bool, bool, bool, Optional[str]]] = {
    "development": ("DEBUG", True, False, False, None),
    "production": ("INFO", False, False, False, "poe.log"),
    "performance": ("DEBUG", False, True, True, "poe-performance.log"),
}
PRESETS = tuple(_PRESET_TABLE)

_loggers: MutableMapping[str, Any] = {}
_active_config: Optional[Any] = None


def _setting(name: str) -> str:
    return os.environ.get(f"POE_{name}", "")


def _enabled(name: str) -> bool:
    return _setting(name).lower() in {"1", "true", "yes", "on"}


def _preset_config(preset: str) -> Any:
    try:
        level, console, as_json, profiling, log_file = _PRESET_TABLE[preset.lower()]
    except KeyError:
        raise ValueError(f"Unknown preset '{preset}'.") from None

    config = tl.Config()
    config.with_min_level(level)
    config.with_console_output(console)
    config.with_colored_output(console)
    config.with_json_format(as_json)
    if profiling:
        config.with_profiling(True)
    if log_file is not None:
        config.with_file_output(_setting("LOG_FILE") or log_file)
        config.with_buffering(True)
    return config


def _environment_config() -> Any:
    config = tl.Config()
    config.with_min_level((_setting("LOG_LEVEL") or "WARNING").upper())
    console = _enabled("LOG_CONSOLE")
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _enabled("NO_COLOR"))
    if _enabled("LOG_JSON"):
        config.with_json_format(True)
    if _setting("LOG_FILE"):
        config.with_file_output(_setting("LOG_FILE"))
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Install a telelog configuration and drop every cached logger.

    With neither argument the configuration is rebuilt from ``POE_*``
    environment variables. ``preset`` must be one of ``PRESETS``.
    """

    global _active_config
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")
    if preset:
        config = _preset_config(preset)
    _active_config = config if config is not None else _environment_config()
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    name = name or DEFAULT_LOGGER_NAME
    if name not in _loggers:
        if _active_config is None:
            configure()
        _loggers[name] = tl.Logger.with_config(name, _active_config)
    return _loggers[name]


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    level = str(level).lower()
    structured = getattr(log, f"{level}_with", None)
    if structured is not None:
        structured(message, [(str(key), str(value)) for key, value in payload.items()])
        return
    plain = getattr(log, level, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` attached as key/value pairs."""

    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
    expected: Tuple[type[BaseException], ...] = (),
) -> Iterator[None]:
    """Profile the wrapped block under ``name``.

    ``component=True`` also tracks the block as a component of the same name;
    a string names the component explicitly. ``metadata`` is attached to the
    logger context for the duration of the block. Exceptions always propagate:
    those in ``expected`` are logged as ``span::reject`` at warning level,
    anything else as ``span::fail`` at error level.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    context = {key: str(value) for key, value in (metadata or {}).items()}

    with ExitStack() as stack:
        for key, value in context.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))

        try:
            yield
        except BaseException as exc:
            if isinstance(exc, expected):
                level, outcome = "warning", "span::reject"
            elif isinstance(exc, Exception):
                level, outcome = "error", "span::fail"
            else:
                raise
            payload = {"span": name, **context, "reason": exc}
            if component_name:
                payload["component"] = component_name
            _emit(log, level, outcome, payload)
            raise


__all__ = ["PRESETS", "configure", "get_logger", "record_event", "span"]

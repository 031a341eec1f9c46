# Per-subsystem logging facade over pluggable output channels.
# Data arguments are serialized only when the call's level is enabled.

from __future__ import annotations
import json, logging, sys, time
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol, TextIO, Tuple, Union

from opentelemetry import trace

from .bootstrap import Config, get_config
from .levels import is_enabled, is_log_level
from .serializer import SerializeOptions, safe_stringify, serialize

_MISSING: Any = object()


class OutputChannel(Protocol):
    def debug(self, *args: Any) -> None: ...
    def info(self, *args: Any) -> None: ...
    def warn(self, *args: Any) -> None: ...
    def error(self, *args: Any) -> None: ...


class NopChannel:
    def debug(self, *args: Any) -> None: pass
    def info(self, *args: Any) -> None: pass
    def warn(self, *args: Any) -> None: pass
    def error(self, *args: Any) -> None: pass


def _trace_fields() -> dict[str, str]:
    ctx = trace.get_current_span().get_span_context()
    if not ctx.is_valid:
        return {}
    return {"trace_id": trace.format_trace_id(ctx.trace_id), "span_id": trace.format_span_id(ctx.span_id)}


def _json_safe(value: Any) -> Any:
    """Keep values that already encode as strict JSON; serialize the rest."""
    try:
        json.dumps(value, allow_nan=False)
    except Exception:
        return serialize(value)
    return value


def _to_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, indent=2, ensure_ascii=False, allow_nan=False)
    except Exception:
        return safe_stringify(value)


class StdoutChannel:
    """One compact JSON line per call, correlated with the active span."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    def _emit(self, level: str, args: Tuple[Any, ...]) -> None:
        rec: dict[str, Any] = {"ts": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()), "level": level}
        if len(args) > 0:
            rec["logger"] = _json_safe(args[0])
        if len(args) > 1:
            rec["message"] = _json_safe(args[1])
        if len(args) > 2:
            rec["args"] = [_json_safe(a) for a in args[2:]]
        rec.update(_trace_fields())
        stream = self._stream if self._stream is not None else sys.stdout
        try:
            line = json.dumps(rec, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        except Exception as e:
            line = json.dumps({"ts": rec["ts"], "level": level, "error": "log_encode_failed", "detail": type(e).__name__})
        stream.write(line + "\n")
        stream.flush()

    def debug(self, *args: Any) -> None: self._emit("debug", args)
    def info(self, *args: Any) -> None: self._emit("info", args)
    def warn(self, *args: Any) -> None: self._emit("warn", args)
    def error(self, *args: Any) -> None: self._emit("error", args)


class LoggingChannel:
    """Forward to a stdlib ``logging.Logger`` so host handlers apply."""

    def __init__(self, logger: Union[logging.Logger, str]) -> None:
        self.logger = logging.getLogger(logger) if isinstance(logger, str) else logger

    def _log(self, lvl: int, args: Tuple[Any, ...]) -> None:
        if not self.logger.isEnabledFor(lvl):
            return
        parts = [_to_text(a) for a in args]
        self.logger.log(lvl, "%s", " ".join(parts))

    def debug(self, *args: Any) -> None: self._log(logging.DEBUG, args)
    def info(self, *args: Any) -> None: self._log(logging.INFO, args)
    def warn(self, *args: Any) -> None: self._log(logging.WARNING, args)
    def error(self, *args: Any) -> None: self._log(logging.ERROR, args)


_stdout_channel = StdoutChannel()


@dataclass(frozen=True)
class Logger:
    prefix: str
    level: str
    serialize_options: SerializeOptions
    channel: OutputChannel

    def enabled(self, level: str) -> bool:
        return is_enabled(level, self.level)

    def _write(self, level: str, msg: str, data: Any, rest: Tuple[Any, ...]) -> None:
        if not self.enabled(level):
            return
        write = getattr(self.channel, level)
        if data is _MISSING:
            write(self.prefix, msg, *rest)
        else:
            write(self.prefix, msg, serialize(data, self.serialize_options), *rest)

    def debug(self, msg: str, data: Any = _MISSING, *rest: Any) -> None: self._write("debug", msg, data, rest)
    def info(self, msg: str, data: Any = _MISSING, *rest: Any) -> None: self._write("info", msg, data, rest)
    def warn(self, msg: str, data: Any = _MISSING, *rest: Any) -> None: self._write("warn", msg, data, rest)
    def error(self, msg: str, data: Any = _MISSING, *rest: Any) -> None: self._write("error", msg, data, rest)


def default_level(cfg: Config) -> str:
    """Override from config when valid, else debug for dev builds, info otherwise."""
    if is_log_level(cfg.log_level):
        return cfg.log_level
    return "debug" if cfg.is_dev else "info"


def create_logger(
    node: str,
    level: Optional[str] = None,
    serialize_options: Union[None, SerializeOptions, Mapping[str, int]] = None,
    channel: Optional[OutputChannel] = None,
) -> Logger:
    cfg = get_config()
    if channel is None:
        channel = cfg.channel if cfg.channel is not None else _stdout_channel
    return Logger(
        prefix=f"[{cfg.service_name}][{node}]",
        level=level if level is not None else default_level(cfg),
        serialize_options=SerializeOptions.resolve(serialize_options, base=cfg.serialize),
        channel=channel,
    )

# Bounded, cycle-safe conversion of arbitrary values into JSON-safe log values.
# serialize() never raises; safe_stringify() never raises either.

from __future__ import annotations
import collections, dataclasses, datetime, enum, itertools, json, math, re, traceback, types
from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

LogValue = Union[None, bool, int, float, str, List["LogValue"], Dict[str, "LogValue"]]

CIRCULAR = "[Circular]"

_MISSING: Any = object()

# default object reprs embed the memory address
_ADDRESS = re.compile(r" at 0x[0-9a-fA-F]+")

# camelCase spellings accepted in override mappings
_ALIASES = {
    "maxKeys": "max_keys",
    "maxArrayLength": "max_array_length",
    "maxStringLength": "max_string_length",
}


@dataclass(frozen=True)
class SerializeOptions:
    depth: int = 8
    max_keys: int = 80
    max_array_length: int = 80
    max_string_length: int = 4000

    def __post_init__(self) -> None:
        for f in dataclasses.fields(self):
            v = getattr(self, f.name)
            if isinstance(v, bool) or not isinstance(v, int) or v <= 0:
                raise ValueError(f"{f.name} must be a positive integer, got {v!r}")

    @classmethod
    def resolve(cls, options: Union[None, "SerializeOptions", Mapping[str, int]] = None,
                base: Optional["SerializeOptions"] = None) -> "SerializeOptions":
        """Merge a partial override onto ``base`` (or the defaults)."""
        base = base if base is not None else cls()
        if options is None:
            return base
        if isinstance(options, SerializeOptions):
            return options
        overrides = {_ALIASES.get(k, k): v for k, v in options.items()}
        unknown = set(overrides) - {f.name for f in dataclasses.fields(cls)}
        if unknown:
            raise ValueError(f"unknown serialize options: {sorted(unknown)}")
        return dataclasses.replace(base, **overrides)


def truncate_string(s: str, max_len: int) -> str:
    if len(s) <= max_len:
        return s
    keep = max(0, max_len - 24)
    return f"{s[:keep]}…(truncated {len(s) - keep} chars)"


def _type_name(v: Any) -> str:
    return type(v).__name__


def _fallback(v: Any) -> str:
    return f"[object {_type_name(v)}]"


def _function_name(fn: Any) -> str:
    try:
        name = getattr(fn, "__name__", None)
    except Exception:
        name = None
    if not isinstance(name, str) or not name or name == "<lambda>":
        return "anonymous"
    return name


def _is_str_keyed_dict(v: Any) -> bool:
    return isinstance(v, dict) and all(isinstance(k, str) for k in v)


def _classify(v: Any) -> str:
    """Map a value to exactly one serializer branch."""
    if v is None or isinstance(v, bool):
        return "scalar"
    if isinstance(v, int):
        return "int"
    if isinstance(v, float):
        return "float"
    if isinstance(v, str):
        return "string"
    if isinstance(v, (datetime.datetime, datetime.date, datetime.time)):
        return "date"
    if isinstance(v, re.Pattern):
        return "pattern"
    if isinstance(v, BaseException):
        return "error"
    if isinstance(v, (bytes, bytearray, memoryview, collections.UserString, enum.Enum, types.ModuleType)):
        return "opaque"
    if isinstance(v, Sequence):
        return "sequence"
    if isinstance(v, Mapping):
        return "object" if _is_str_keyed_dict(v) else "map"
    if isinstance(v, Set):
        return "set"
    if callable(v):
        return "function"
    if dataclasses.is_dataclass(v) or hasattr(v, "__dict__"):
        return "object"
    return "opaque"


def _own_items(v: Any) -> List[tuple]:
    if isinstance(v, dict):
        return list(v.items())
    if dataclasses.is_dataclass(v):
        pairs = [(f.name, getattr(v, f.name, _MISSING)) for f in dataclasses.fields(v)]
        return [(k, item) for k, item in pairs if item is not _MISSING]
    return list(vars(v).items())


def serialize(value: Any, options: Union[None, SerializeOptions, Mapping[str, int]] = None) -> LogValue:
    """Convert ``value`` into a bounded JSON-safe structure.

    Depth, key count, sequence length and string length are capped by
    ``options``; anything over a cap is replaced by a marker string stating
    how much was dropped. Containers seen earlier in the same call render as
    ``"[Circular]"``.
    """
    o = SerializeOptions.resolve(options)
    # id -> object; holding the object keeps its id from being reused mid-call
    seen: Dict[int, Any] = {}

    def walk(v: Any, depth_left: int) -> LogValue:
        try:
            return visit(v, _classify(v), depth_left)
        except Exception:
            return _fallback(v)

    def visit(v: Any, kind: str, depth_left: int) -> LogValue:
        if kind == "scalar":
            return v
        if kind == "int":
            return int(v)
        if kind == "float":
            if math.isfinite(v):
                return float(v)
            return "NaN" if math.isnan(v) else ("Infinity" if v > 0 else "-Infinity")
        if kind == "string":
            return truncate_string(str(v), o.max_string_length)
        if kind == "date":
            return v.isoformat()
        if kind == "pattern":
            return repr(v)
        if kind == "error":
            return error_to_dict(v, depth_left)
        if kind == "function":
            return f"[Function {_function_name(v)}]"
        if kind == "opaque":
            try:
                text = str(v)
            except Exception:
                return _fallback(v)
            if _ADDRESS.search(text):
                return _fallback(v)
            return truncate_string(text, o.max_string_length)

        if depth_left <= 0:
            if kind == "sequence":
                return f"[{_type_name(v)}({len(v)})]"
            return f"[Object {_type_name(v)}]"

        if id(v) in seen:
            return CIRCULAR
        seen[id(v)] = v

        if kind == "sequence":
            out = [walk(item, depth_left - 1) for item in itertools.islice(v, o.max_array_length)]
            if len(v) > o.max_array_length:
                out.append(f"…(+{len(v) - o.max_array_length} items)")
            return out

        if kind == "map":
            entries = [[walk(k, depth_left - 1), walk(item, depth_left - 1)]
                       for k, item in itertools.islice(v.items(), o.max_keys)]
            res: Dict[str, LogValue] = {"type": "Map", "entries": entries}
            if len(v) > o.max_keys:
                res["more"] = f"…(+{len(v) - o.max_keys} entries)"
            return res

        if kind == "set":
            values = [walk(item, depth_left - 1) for item in itertools.islice(v, o.max_array_length)]
            res = {"type": "Set", "values": values}
            if len(v) > o.max_array_length:
                res["more"] = f"…(+{len(v) - o.max_array_length} items)"
            return res

        items = _own_items(v)
        obj: Dict[str, LogValue] = {}
        for k, item in items[: o.max_keys]:
            obj[str(k)] = walk(item, depth_left - 1)
        if len(items) > o.max_keys:
            obj["__moreKeys"] = f"…(+{len(items) - o.max_keys} keys)"
        return obj

    def error_to_dict(err: BaseException, depth_left: int) -> LogValue:
        if id(err) in seen:
            return CIRCULAR
        seen[id(err)] = err
        try:
            message = str(err)
        except Exception:
            message = _fallback(err)
        try:
            stack: Optional[str] = "".join(traceback.format_exception(type(err), err, err.__traceback__))
        except Exception:
            stack = None
        out: Dict[str, LogValue] = {
            "name": _type_name(err),
            "message": walk(message, depth_left - 1),
            "stack": walk(stack, depth_left - 1),
        }
        if depth_left > 0:
            for k, item in list(vars(err).items())[: o.max_keys]:
                out[str(k)] = walk(item, depth_left - 1)
        return out

    return walk(value, o.depth)


def safe_stringify(value: Any, options: Union[None, SerializeOptions, Mapping[str, int]] = None) -> str:
    """Serialize ``value`` and encode it as 2-space indented JSON text."""
    try:
        return json.dumps(serialize(value, options), indent=2, ensure_ascii=False, allow_nan=False)
    except Exception as e:
        try:
            detail = str(e)
        except Exception:
            detail = _type_name(e)
        return json.dumps({"error": "safe_stringify_failed", "detail": detail}, indent=2)

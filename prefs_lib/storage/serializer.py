from __future__ import annotations
from typing import Any, Protocol
import json


class Serializer(Protocol):
    """Serialize/deserialize preference maps for backends that store bytes.

    Implementations should be symmetric: `dump` -> bytes, `load` <- bytes.
    """

    def dump(self, value: Any) -> bytes: ...

    def load(self, data: bytes) -> Any: ...


class JSONSerializer:
    """Serializer using JSON (text).

    Only JSON native values are accepted (str, int, float, bool, None,
    dict, list); anything else raises `TypeError` from `dump`.
    """

    def __init__(self, indent: int | None = 2) -> None:
        self.indent = indent

    def dump(self, value: Any) -> bytes:
        return json.dumps(value, indent=self.indent, ensure_ascii=False).encode("utf-8")

    def load(self, data: bytes) -> Any:
        return json.loads(data.decode("utf-8"))

    def __repr__(self) -> str:
        return f"JSONSerializer(indent={self.indent})"

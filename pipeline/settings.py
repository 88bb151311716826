"""
Node Settings
=============
Dict-backed key/value store nodes load from and save to.
"""

from typing import Any, Dict, Mapping, Optional, Union


class NodeSettings:
    """Typed accessors over a plain dict of node settings."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values: Dict[str, Any] = dict(values or {})

    @classmethod
    def wrap(cls, settings: Union["NodeSettings", Mapping[str, Any], None]) -> "NodeSettings":
        if isinstance(settings, NodeSettings):
            return settings
        return cls(settings)

    def get(self, key: str, default: Any = None) -> Any:
        value = self._values.get(key)
        return default if value is None else value

    def get_string(self, key: str, default: str = "") -> str:
        value = self._values.get(key)
        if value is None:
            return default
        return str(value)

    def get_number(self, key: str, default: float = 0) -> float:
        value = self._values.get(key)
        if value is None or value == "":
            return default
        try:
            number = float(value)
        except (TypeError, ValueError):
            return default
        return int(number) if number.is_integer() else number

    def get_boolean(self, key: str, default: bool = False) -> bool:
        value = self._values.get(key)
        if value is None:
            return default
        if isinstance(value, str):
            return value.strip().lower() in ("true", "1", "yes", "on")
        return bool(value)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._values)

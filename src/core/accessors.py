"""
Typed read access on top of ``get``.

Every ``*_or`` accessor returns the caller's default when the key is
missing *or* when the stored text does not convert; conversion errors
are never surfaced.  The short forms use the type's zero value.
"""
from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

from core.conversions import parse_bool, parse_float, parse_int64, parse_uint64

T = TypeVar("T")


class TypedAccessors:
    """Mixin for any class that provides ``get(key) -> str | None``."""

    __slots__ = ()

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def _convert_or(self, key: str, default: T, convert: Callable[[str], T]) -> T:
        raw = self.get(key)
        if raw is None:
            return default
        try:
            return convert(raw)
        except ValueError:
            return default

    # ------------------------------------------------------------------
    # With caller-supplied default
    # ------------------------------------------------------------------

    def string_or(self, key: str, default: str) -> str:
        raw = self.get(key)
        return default if raw is None else raw

    def int_or(self, key: str, default: int) -> int:
        return self._convert_or(key, default, parse_int64)

    def int64_or(self, key: str, default: int) -> int:
        return self._convert_or(key, default, parse_int64)

    def uint64_or(self, key: str, default: int) -> int:
        return self._convert_or(key, default, parse_uint64)

    def float64_or(self, key: str, default: float) -> float:
        return self._convert_or(key, default, parse_float)

    def bool_or(self, key: str, default: bool) -> bool:
        """``1 t T true TRUE True`` / ``0 f F false FALSE False``; anything else → *default*."""
        return self._convert_or(key, default, parse_bool)

    def object_or(
        self,
        key: str,
        default: Any,
        mapper: Callable[[str, str], Any],
    ) -> Any:
        """Map ``(key, raw_value)`` through *mapper*; any mapper error → *default*."""
        raw = self.get(key)
        if raw is None:
            return default
        try:
            return mapper(key, raw)
        except Exception:
            return default

    # ------------------------------------------------------------------
    # Zero-value defaults
    # ------------------------------------------------------------------

    def string(self, key: str) -> str:
        return self.string_or(key, "")

    def int(self, key: str) -> int:
        return self.int_or(key, 0)

    def int64(self, key: str) -> int:
        return self.int64_or(key, 0)

    def uint64(self, key: str) -> int:
        return self.uint64_or(key, 0)

    def float64(self, key: str) -> float:
        return self.float64_or(key, 0.0)

    def bool(self, key: str) -> bool:
        return self.bool_or(key, False)

    def object(self, key: str, mapper: Callable[[str, str], Any]) -> Any:
        return self.object_or(key, None, mapper)

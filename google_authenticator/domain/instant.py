"""コード算出時刻の指定方法"""
from __future__ import annotations

import warnings
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Union


@dataclass(frozen=True, slots=True)
class Now:
    """時計の現在時刻を使う"""


@dataclass(frozen=True, slots=True)
class At:
    """指定時刻を使う"""

    moment: datetime

    def timestamp(self) -> float:
        moment = self.moment
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return moment.timestamp()


@dataclass(frozen=True, slots=True)
class Counter:
    """計算済みのタイムステップ値をそのまま使う"""

    value: int


Instant = Union[Now, At, Counter]
InstantLike = Union[Now, At, Counter, datetime, int, float, None]


def to_instant(value: InstantLike) -> Instant:
    """呼び出し側の指定を :data:`Instant` に正規化する。

    ``None`` は :class:`Now`、``datetime`` は :class:`At` になる。
    数値を直接渡す形式は旧来の互換用で、``DeprecationWarning`` を出した上で
    :class:`Counter` として扱う。
    """

    if value is None:
        return Now()
    if isinstance(value, (Now, At, Counter)):
        return value
    if isinstance(value, datetime):
        return At(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        warnings.warn(
            "Passing a raw time-step number is deprecated; pass a datetime or Counter(...) instead.",
            DeprecationWarning,
            stacklevel=4,
        )
        return Counter(int(value))
    raise TypeError(f"Unsupported instant type: {type(value).__name__}")


def resolve_counter(instant: Instant, now: datetime, period: int) -> int:
    """``instant`` を HMAC に渡すタイムステップ値へ変換する"""

    if isinstance(instant, Counter):
        return instant.value
    if isinstance(instant, At):
        return int(instant.timestamp() // period)
    return int(At(now).timestamp() // period)


__all__ = ["At", "Counter", "Instant", "InstantLike", "Now", "resolve_counter", "to_instant"]

"""時計の実装"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """システム時刻を UTC で返す"""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """常に同じ時刻を返す。基準時刻を固定した検証やテスト用"""

    def __init__(self, instant: datetime):
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        self._instant = instant

    def now(self) -> datetime:
        return self._instant


__all__ = ["Clock", "FixedClock", "SystemClock"]

"""Google Authenticator 互換の TOTP 生成・検証"""
from __future__ import annotations

import hashlib
import hmac
import struct
import warnings
from datetime import datetime
from threading import Lock
from typing import TYPE_CHECKING, Optional

from google_authenticator.domain.exceptions import InvalidConfiguration
from google_authenticator.domain.instant import (
    InstantLike,
    resolve_counter,
    to_instant,
)
from google_authenticator.domain.validators import (
    decode_secret,
    encode_secret,
    validate_code_length,
    validate_code_period,
    validate_discrepancy,
    validate_drift_window,
)
from google_authenticator.infrastructure.clock import Clock, FixedClock, SystemClock
from google_authenticator.infrastructure.random_source import RandomSource, SecureRandomSource
from google_authenticator.kernel.logging import structured_logger

if TYPE_CHECKING:  # pragma: no cover
    from google_authenticator.config import AuthenticatorSettings


SECRET_BYTES = 16
DEFAULT_CODE_LENGTH = 6
DEFAULT_DRIFT_WINDOW = 10
DEFAULT_CODE_PERIOD = 30
DEFAULT_DISCREPANCY = 1

_log = structured_logger(__name__, component="authenticator")


def _truncate(digest: bytes, code_length: int) -> str:
    offset = digest[-1] & 0x0F
    value = struct.unpack(">I", digest[offset:offset + 4])[0] & 0x7FFFFFFF
    return str(value % (10 ** code_length)).zfill(code_length)


class Authenticator:
    """TOTP シークレットの発行とコードの算出・検証を行う。

    インスタンスはシークレットを保持しない。保持する状態は有効期間
    （``code_period``）のみで、:meth:`set_code_period` 以外では変化しない。
    """

    def __init__(
        self,
        code_length: int = DEFAULT_CODE_LENGTH,
        drift_window: int = DEFAULT_DRIFT_WINDOW,
        instance_time: Optional[datetime] = None,
        code_period: int = DEFAULT_CODE_PERIOD,
        *,
        clock: Clock | None = None,
        random_source: RandomSource | None = None,
    ):
        self.code_length = validate_code_length(code_length)
        self.drift_window = validate_drift_window(drift_window)
        self._code_period = validate_code_period(code_period)
        self._lock = Lock()
        if clock is None:
            clock = FixedClock(instance_time) if instance_time is not None else SystemClock()
        self.clock = clock
        self.random_source = random_source or SecureRandomSource()

    @classmethod
    def from_settings(cls, settings: "AuthenticatorSettings", **kwargs) -> "Authenticator":
        return cls(
            code_length=settings.code_length,
            drift_window=settings.drift_window,
            code_period=settings.code_period,
            **kwargs,
        )

    def get_code_period(self) -> int:
        with self._lock:
            return self._code_period

    def set_code_period(self, seconds: int) -> bool:
        """有効期間（秒）を変更する。

        成功時の戻り値は ``False``。既存の呼び出し側がこの値に依存しているため
        変更しないこと。範囲外の値は :class:`InvalidConfiguration` を送出し、
        設定は元のまま残る。
        """

        try:
            validate_code_period(seconds)
        except InvalidConfiguration:
            _log.warning("totp.period.rejected", requested=seconds, current=self.get_code_period())
            raise

        with self._lock:
            previous = self._code_period
            self._code_period = seconds
        _log.info("totp.period.changed", previous=previous, current=seconds)
        return False

    def generate_secret(self) -> str:
        secret = encode_secret(self.random_source.token_bytes(SECRET_BYTES))
        _log.debug("totp.secret.generated", length=len(secret))
        return secret

    def current_counter(self, instant: InstantLike = None) -> int:
        return resolve_counter(to_instant(instant), self.clock.now(), self.get_code_period())

    def get_code(self, secret: str, instant: InstantLike = None) -> str:
        key = decode_secret(secret)
        counter = self.current_counter(instant)
        return self._code_for_counter(key, counter)

    def _code_for_counter(self, key: bytes, counter: int) -> str:
        msg = struct.pack(">Q", counter & 0xFFFFFFFFFFFFFFFF)
        digest = hmac.new(key, msg, hashlib.sha1).digest()
        return _truncate(digest, self.code_length)

    def check_code(
        self,
        secret: str,
        code: str,
        instant: InstantLike = None,
        discrepancy: int | None = None,
    ) -> bool:
        """``code`` が基準時刻の前後 ``discrepancy`` ステップ内で有効か判定する。

        ``discrepancy`` は ``drift_window`` を上限とする。省略時は 1 （30 秒周期なら
        ±30 秒）で、``drift_window`` が 0 の場合は現在のステップのみを許容する。
        """

        if discrepancy is None:
            discrepancy = min(DEFAULT_DISCREPANCY, self.drift_window)
        validate_discrepancy(discrepancy, self.drift_window)
        key = decode_secret(secret)
        anchor = self.current_counter(instant)
        log = _log.bind(discrepancy=discrepancy)

        candidate = str(code).strip()
        if not candidate.isascii():
            log.info("totp.check.rejected")
            return False
        matched = False
        for step in range(anchor - discrepancy, anchor + discrepancy + 1):
            # 全ステップを比較して一致位置による処理時間差を出さない
            if hmac.compare_digest(self._code_for_counter(key, step), candidate):
                matched = True

        if matched:
            log.info("totp.check.accepted")
        else:
            log.info("totp.check.rejected")
        return matched

    def get_url(self, user: str, hostname: str, secret: str, issuer: Optional[str] = None) -> str:
        """旧形式の QR コード URL を返す（非推奨）"""

        warnings.warn(
            "Authenticator.get_url() is deprecated; use google_authenticator.generate_qr_url() instead.",
            DeprecationWarning,
            stacklevel=2,
        )
        from google_authenticator.presentation.qr_url import generate_qr_url

        url = generate_qr_url(f"{user}@{hostname}", secret)
        if issuer:
            # 旧 URL と同じ形にするため issuer はラベルに含めず末尾に連結する
            url += f"%26issuer%3D{issuer}"
        return url


__all__ = [
    "Authenticator",
    "DEFAULT_CODE_LENGTH",
    "DEFAULT_CODE_PERIOD",
    "DEFAULT_DISCREPANCY",
    "DEFAULT_DRIFT_WINDOW",
    "SECRET_BYTES",
]

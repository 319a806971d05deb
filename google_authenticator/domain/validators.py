"""バリデーションユーティリティ"""
from __future__ import annotations

import base64
import binascii
import re

from .exceptions import DecodingError, InvalidConfiguration

MIN_CODE_PERIOD = 1
MAX_CODE_PERIOD = 86400

_SECRET_CHARS = re.compile(r"^[A-Z2-7]*$")


def normalize_secret(secret: str) -> str:
    if secret is None:
        raise DecodingError("シークレットを指定してください")
    cleaned = re.sub(r"\s+", "", secret).rstrip("=")
    return cleaned.upper()


def decode_secret(secret: str) -> bytes:
    """Base32 のシークレットを HMAC 用の鍵に戻す"""

    normalized = normalize_secret(secret)
    if not _SECRET_CHARS.match(normalized):
        raise DecodingError("シークレットは Base32 形式で入力してください")
    # Base32 のパディングを自動調整
    padded = normalized + "=" * (-len(normalized) % 8)
    try:
        return base64.b32decode(padded, casefold=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodingError("シークレットの形式が正しくありません") from exc


def encode_secret(raw: bytes) -> str:
    return base64.b32encode(raw).decode("ascii").rstrip("=")


def validate_code_period(seconds: int) -> int:
    if isinstance(seconds, bool) or not isinstance(seconds, int):
        raise InvalidConfiguration("有効期間は整数で指定してください", field="code_period")
    if seconds < MIN_CODE_PERIOD or seconds > MAX_CODE_PERIOD:
        raise InvalidConfiguration(
            f"有効期間は{MIN_CODE_PERIOD}〜{MAX_CODE_PERIOD}秒の範囲で指定してください",
            field="code_period",
        )
    return seconds


def validate_code_length(digits: int) -> int:
    if isinstance(digits, bool) or not isinstance(digits, int) or digits < 1:
        raise InvalidConfiguration("桁数は1以上の整数で指定してください", field="code_length")
    return digits


def validate_drift_window(window: int) -> int:
    if isinstance(window, bool) or not isinstance(window, int) or window < 0:
        raise InvalidConfiguration("許容ステップ数は0以上の整数で指定してください", field="drift_window")
    return window


def validate_discrepancy(discrepancy: int, drift_window: int) -> int:
    if isinstance(discrepancy, bool) or not isinstance(discrepancy, int) or discrepancy < 0:
        raise InvalidConfiguration("許容ステップ数は0以上の整数で指定してください", field="discrepancy")
    if discrepancy > drift_window:
        raise InvalidConfiguration(
            f"許容ステップ数は{drift_window}以下で指定してください",
            field="discrepancy",
        )
    return discrepancy

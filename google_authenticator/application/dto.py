"""認証コード アプリケーション層 DTO"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class GenerateCodeInput:
    secret: str
    at: Optional[str] = None


@dataclass(slots=True)
class VerifyCodeInput:
    secret: str
    code: str
    at: Optional[str] = None
    discrepancy: Optional[int] = None


@dataclass(slots=True)
class EnrollInput:
    account_name: str
    issuer: Optional[str] = None
    size: int = 200


@dataclass(slots=True)
class CodePreview:
    """UI プレビュー用の OTP 情報"""

    code: str
    remaining_seconds: int


@dataclass(slots=True)
class Enrollment:
    secret: str
    otpauth_uri: str
    qr_url: str
    qr_data_uri: str

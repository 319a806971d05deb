"""認証コード用ユースケース"""
from __future__ import annotations

from datetime import datetime, timezone

from google_authenticator.application.dto import (
    CodePreview,
    Enrollment,
    EnrollInput,
    GenerateCodeInput,
    VerifyCodeInput,
)
from google_authenticator.domain.authenticator import Authenticator
from google_authenticator.domain.exceptions import UnresolvableInstant
from google_authenticator.domain.instant import At, Instant, Now
from google_authenticator.kernel.logging import structured_logger
from google_authenticator.presentation.qr_url import (
    build_otpauth_uri,
    generate_qr_url,
    render_qr_data_uri,
)

_log = structured_logger(__name__, component="use_cases")


def parse_instant(value: str | None) -> datetime:
    """``YYYY-MM-DD HH:MM:SS`` 形式などの文字列を UTC の時刻に変換する"""

    if value is None:
        raise UnresolvableInstant(value)
    text = value.strip()
    if not text:
        raise UnresolvableInstant(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise UnresolvableInstant(value) from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _instant_from_text(value: str | None) -> Instant:
    if value is None:
        return Now()
    return At(parse_instant(value))


class GenerateCodeUseCase:
    def __init__(self, authenticator: Authenticator | None = None):
        self.authenticator = authenticator or Authenticator()

    def execute(self, payload: GenerateCodeInput) -> CodePreview:
        instant = _instant_from_text(payload.at)
        moment = instant.moment if isinstance(instant, At) else self.authenticator.clock.now()
        period = self.authenticator.get_code_period()
        code = self.authenticator.get_code(payload.secret, At(moment))
        remaining = period - int(At(moment).timestamp()) % period
        return CodePreview(code=code, remaining_seconds=remaining)


class VerifyCodeUseCase:
    """入力されたコードを検証する。

    時刻文字列が解釈できない場合は例外にせず ``False`` を返す。
    ログイン試行を拒否するだけでリクエスト自体は失敗させない。
    """

    def __init__(self, authenticator: Authenticator | None = None):
        self.authenticator = authenticator or Authenticator()

    def execute(self, payload: VerifyCodeInput) -> bool:
        try:
            instant = _instant_from_text(payload.at)
        except UnresolvableInstant:
            _log.bind(at=payload.at).warning("totp.check.unresolvable_instant")
            return False
        return self.authenticator.check_code(
            payload.secret,
            payload.code,
            instant,
            discrepancy=payload.discrepancy,
        )


class EnrollUseCase:
    def __init__(self, authenticator: Authenticator | None = None):
        self.authenticator = authenticator or Authenticator()

    def execute(self, payload: EnrollInput) -> Enrollment:
        secret = self.authenticator.generate_secret()
        otpauth_uri = build_otpauth_uri(
            payload.account_name,
            secret,
            payload.issuer,
            digits=self.authenticator.code_length,
            period=self.authenticator.get_code_period(),
        )
        return Enrollment(
            secret=secret,
            otpauth_uri=otpauth_uri,
            qr_url=generate_qr_url(payload.account_name, secret, payload.issuer, size=payload.size),
            qr_data_uri=render_qr_data_uri(otpauth_uri),
        )

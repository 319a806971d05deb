"""認証コード機能のドメイン例外"""


class AuthenticatorError(Exception):
    """認証コード関連の基底例外"""


class InvalidConfiguration(AuthenticatorError, ValueError):
    """設定値（桁数・有効期間・許容ステップ数）が範囲外"""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class DecodingError(AuthenticatorError, ValueError):
    """シークレットが Base32 として解釈できない"""


class UnresolvableInstant(AuthenticatorError, ValueError):
    """時刻表現を具体的な時刻に解決できない"""

    def __init__(self, value: object):
        super().__init__(f"Cannot resolve {value!r} to a point in time")
        self.value = value


class InvalidQrParameter(AuthenticatorError, ValueError):
    """QR コード URL の生成パラメータが不正"""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field

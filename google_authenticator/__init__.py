"""Google Authenticator 互換の TOTP ライブラリ。"""

from .domain import (
    At,
    Authenticator,
    AuthenticatorError,
    Counter,
    DecodingError,
    Instant,
    InvalidConfiguration,
    InvalidQrParameter,
    Now,
    UnresolvableInstant,
)
from .presentation import generate_qr_url

__version__ = "2.1.0"

__all__ = [
    "At",
    "Authenticator",
    "AuthenticatorError",
    "Counter",
    "DecodingError",
    "Instant",
    "InvalidConfiguration",
    "InvalidQrParameter",
    "Now",
    "UnresolvableInstant",
    "generate_qr_url",
]

"""認証コードドメインの公開インターフェース。"""

from .authenticator import Authenticator
from .exceptions import (
    AuthenticatorError,
    DecodingError,
    InvalidConfiguration,
    InvalidQrParameter,
    UnresolvableInstant,
)
from .instant import At, Counter, Instant, Now

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
]

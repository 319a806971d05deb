import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from google_authenticator.domain.validators import (
    validate_code_length,
    validate_code_period,
    validate_drift_window,
)
from google_authenticator.domain.exceptions import InvalidConfiguration


def _coerce_env_value(env: Mapping[str, str], key: str, default):
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    if isinstance(default, int):
        try:
            return int(raw)
        except ValueError as exc:
            raise InvalidConfiguration(f"{key} は整数で指定してください", field=key) from exc
    return raw.strip()


@dataclass(frozen=True, slots=True)
class AuthenticatorSettings:
    code_length: int = 6
    drift_window: int = 10
    code_period: int = 30
    log_level: str = "INFO"


def load_config(env: Optional[Mapping[str, str]] = None, *, use_dotenv: bool = True) -> AuthenticatorSettings:
    """環境変数（と .env）から設定を読み込む"""

    if env is None:
        # .env読み込み（既存の環境変数は上書きしない）
        if use_dotenv:
            load_dotenv(find_dotenv(usecwd=True))
        env = os.environ

    defaults = AuthenticatorSettings()
    code_length = _coerce_env_value(env, "TOTP_CODE_LENGTH", defaults.code_length)
    drift_window = _coerce_env_value(env, "TOTP_DRIFT_WINDOW", defaults.drift_window)
    code_period = _coerce_env_value(env, "TOTP_CODE_PERIOD", defaults.code_period)
    log_level = _coerce_env_value(env, "TOTP_LOG_LEVEL", defaults.log_level).upper()

    return AuthenticatorSettings(
        code_length=validate_code_length(code_length),
        drift_window=validate_drift_window(drift_window),
        code_period=validate_code_period(code_period),
        log_level=log_level,
    )


def create_authenticator(env: Optional[Mapping[str, str]] = None, **kwargs):
    """設定を読み込み、ログを構成した上で :class:`Authenticator` を生成する"""

    from google_authenticator.domain.authenticator import Authenticator
    from google_authenticator.kernel.logging import configure_logging

    settings = load_config(env)
    configure_logging(settings.log_level)
    return Authenticator.from_settings(settings, **kwargs)

"""登録用 otpauth URI と QR コードの生成"""
from __future__ import annotations

import base64
import io
from typing import Optional
from urllib.parse import quote

import pyotp
import qrcode
from qrcode.constants import ERROR_CORRECT_M

from google_authenticator.domain.exceptions import InvalidQrParameter

CHART_URL = "https://chart.googleapis.com/chart?chs={size}x{size}&chld=M|0&cht=qr&chl={data}"


def _validate_label(account_name: str, issuer: Optional[str]) -> None:
    if not account_name or ":" in account_name:
        raise InvalidQrParameter(
            "アカウント名は空にできず、コロンを含めることはできません", field="account_name"
        )
    if issuer is not None and (not issuer or ":" in issuer):
        raise InvalidQrParameter("issuer は空にできず、コロンを含めることはできません", field="issuer")


def build_otpauth_uri(
    account_name: str,
    secret: str,
    issuer: Optional[str] = None,
    *,
    digits: int = 6,
    period: int = 30,
) -> str:
    """認証アプリに読み込ませる provisioning URI を返す"""

    _validate_label(account_name, issuer)
    totp = pyotp.TOTP(secret, digits=digits, interval=period)
    return totp.provisioning_uri(name=account_name, issuer_name=issuer)


def generate_qr_url(account_name: str, secret: str, issuer: Optional[str] = None, size: int = 200) -> str:
    """Google Chart API で描画する QR コード画像の URL を返す。

    旧バージョンと同じ URL を返すため、ラベルと issuer はエンコードせずに
    otpauth URI へ埋め込み、URI 全体を一度だけエンコードする。
    """

    if isinstance(size, bool) or not isinstance(size, int) or size < 1:
        raise InvalidQrParameter("サイズは1以上の整数で指定してください", field="size")
    _validate_label(account_name, issuer)

    label = account_name if issuer is None else f"{issuer}:{account_name}"
    uri = f"otpauth://totp/{label}?secret={secret}"
    if issuer is not None:
        uri += f"&issuer={issuer}"
    return CHART_URL.format(size=size, data=quote(uri, safe=""))


def render_qr_data_uri(uri: str, box_size: int = 10, border: int = 4) -> str:
    """otpauth URI を PNG の QR コードにして data URI で返す"""
    qr = qrcode.QRCode(error_correction=ERROR_CORRECT_M, box_size=box_size, border=border)
    qr.add_data(uri)
    qr.make(fit=True)
    buf = io.BytesIO()
    qr.make_image().save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


__all__ = ["CHART_URL", "build_otpauth_uri", "generate_qr_url", "render_qr_data_uri"]

from .qr_url import build_otpauth_uri, generate_qr_url, render_qr_data_uri

__all__ = ["build_otpauth_uri", "generate_qr_url", "render_qr_data_uri"]

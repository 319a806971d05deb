import logging
import os
import sys
from datetime import datetime
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from google_authenticator import Authenticator  # noqa: E402
from google_authenticator.infrastructure.random_source import SeededRandomSource  # noqa: E402
from tests.helpers.totp_fixtures import ANCHOR  # noqa: E402

os.environ.setdefault("TESTING", "true")


@pytest.fixture
def anchor() -> datetime:
    return ANCHOR


@pytest.fixture
def authenticator() -> Authenticator:
    """基準時刻 2012-03-17 22:17:00 に固定した認証器"""
    return Authenticator(6, 10, ANCHOR)


@pytest.fixture
def seeded_authenticator() -> Authenticator:
    return Authenticator(6, 10, ANCHOR, random_source=SeededRandomSource(1234))


@pytest.fixture
def captured_records():
    """パッケージロガーに出たレコードを集める"""
    records = []

    class _ListHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - simple data push
            records.append(record)

    handler = _ListHandler(level=logging.DEBUG)
    logger = logging.getLogger("google_authenticator")
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield records
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)

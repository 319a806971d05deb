from datetime import datetime, timezone
from unittest.mock import create_autospec
from urllib.parse import parse_qs, unquote, urlparse

import pytest

from google_authenticator import Authenticator, DecodingError, UnresolvableInstant
from google_authenticator.application import (
    EnrollInput,
    EnrollUseCase,
    GenerateCodeInput,
    GenerateCodeUseCase,
    VerifyCodeInput,
    VerifyCodeUseCase,
    parse_instant,
)
from google_authenticator.domain.instant import At, Now

from tests.helpers.totp_fixtures import ANCHOR, REFERENCE_SECRET, UNRESOLVABLE_TIME


def _code_at(authenticator: Authenticator, text: str) -> str:
    return GenerateCodeUseCase(authenticator).execute(GenerateCodeInput(REFERENCE_SECRET, at=text)).code


@pytest.mark.parametrize(
    "input_date, expectation",
    [
        ("2012-03-17 22:16:29", False),
        ("2012-03-17 22:16:30", True),
        ("2012-03-17 22:17:00", True),
        ("2012-03-17 22:17:30", True),
        ("2012-03-17 22:18:00", False),
    ],
)
def test_verify_code_with_parsed_dates(authenticator, input_date, expectation):
    code = _code_at(authenticator, input_date)

    result = VerifyCodeUseCase(authenticator).execute(VerifyCodeInput(REFERENCE_SECRET, code))

    assert result is expectation


def test_verify_code_with_unresolvable_date_returns_false(authenticator, captured_records):
    code = authenticator.get_code(REFERENCE_SECRET)

    result = VerifyCodeUseCase(authenticator).execute(
        VerifyCodeInput(REFERENCE_SECRET, code, at=UNRESOLVABLE_TIME)
    )

    assert result is False
    events = [getattr(record, "event", None) for record in captured_records]
    assert events == ["totp.check.unresolvable_instant"]


def test_verify_code_anchors_to_parsed_time():
    authenticator = Authenticator()
    code = authenticator.get_code(REFERENCE_SECRET, ANCHOR)

    use_case = VerifyCodeUseCase(authenticator)

    assert use_case.execute(VerifyCodeInput(REFERENCE_SECRET, code, at="2012-03-17T22:17:30Z")) is True
    assert use_case.execute(VerifyCodeInput(REFERENCE_SECRET, code, at="2012-03-17T22:20:00Z")) is False


def test_verify_code_passes_discrepancy(authenticator):
    code = _code_at(authenticator, "2012-03-17 22:15:00")

    use_case = VerifyCodeUseCase(authenticator)

    assert use_case.execute(VerifyCodeInput(REFERENCE_SECRET, code)) is False
    assert use_case.execute(VerifyCodeInput(REFERENCE_SECRET, code, discrepancy=4)) is True


def test_verify_code_propagates_decoding_error(authenticator):
    with pytest.raises(DecodingError):
        VerifyCodeUseCase(authenticator).execute(VerifyCodeInput("not base32!", "123456"))


def test_verify_code_delegates_to_authenticator():
    authenticator = create_autospec(Authenticator, instance=True)
    authenticator.check_code.return_value = True

    result = VerifyCodeUseCase(authenticator).execute(VerifyCodeInput(REFERENCE_SECRET, "123456"))

    assert result is True
    authenticator.check_code.assert_called_once_with(REFERENCE_SECRET, "123456", Now(), discrepancy=None)


def test_generate_code_reports_remaining_seconds(authenticator):
    preview = GenerateCodeUseCase(authenticator).execute(
        GenerateCodeInput(REFERENCE_SECRET, at="2012-03-17 22:17:10")
    )

    assert preview.code == authenticator.get_code(REFERENCE_SECRET)
    assert preview.remaining_seconds == 20


def test_generate_code_defaults_to_clock(authenticator, anchor):
    preview = GenerateCodeUseCase(authenticator).execute(GenerateCodeInput(REFERENCE_SECRET))

    assert preview.code == authenticator.get_code(REFERENCE_SECRET, At(anchor))
    assert preview.remaining_seconds == 30


def test_generate_code_raises_for_unresolvable_date(authenticator):
    with pytest.raises(UnresolvableInstant):
        GenerateCodeUseCase(authenticator).execute(GenerateCodeInput(REFERENCE_SECRET, at=UNRESOLVABLE_TIME))


def test_enroll_returns_secret_and_urls(seeded_authenticator):
    enrollment = EnrollUseCase(seeded_authenticator).execute(
        EnrollInput(account_name="foo@foobar.org", issuer="FooBar")
    )

    assert len(enrollment.secret) == 26
    parsed = urlparse(enrollment.otpauth_uri)
    assert parsed.scheme == "otpauth"
    assert parsed.netloc == "totp"
    assert unquote(parsed.path) == "/FooBar:foo@foobar.org"
    query = parse_qs(parsed.query)
    assert query["secret"] == [enrollment.secret]
    assert query["issuer"] == ["FooBar"]
    assert "digits" not in query
    assert enrollment.qr_data_uri.startswith("data:image/png;base64,")
    assert enrollment.qr_url.startswith("https://chart.googleapis.com/chart?chs=200x200")
    assert seeded_authenticator.check_code(
        enrollment.secret, seeded_authenticator.get_code(enrollment.secret)
    )


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2012-03-17 22:17:00", datetime(2012, 3, 17, 22, 17, tzinfo=timezone.utc)),
        ("2012-03-17T22:17:00Z", datetime(2012, 3, 17, 22, 17, tzinfo=timezone.utc)),
        ("2012-03-17T23:17:00+01:00", datetime(2012, 3, 17, 22, 17, tzinfo=timezone.utc)),
        ("  2012-03-17  ", datetime(2012, 3, 17, tzinfo=timezone.utc)),
    ],
)
def test_parse_instant(text, expected):
    assert parse_instant(text) == expected


@pytest.mark.parametrize("text", [None, "", "   ", UNRESOLVABLE_TIME, "2012-13-45 99:00:00"])
def test_parse_instant_rejects_unresolvable(text):
    with pytest.raises(UnresolvableInstant):
        parse_instant(text)


def test_verify_code_with_zero_drift_window_uses_current_step_only():
    authenticator = Authenticator(6, 0, ANCHOR)
    use_case = VerifyCodeUseCase(authenticator)
    current = authenticator.get_code(REFERENCE_SECRET)
    previous = _code_at(authenticator, "2012-03-17 22:16:30")

    assert use_case.execute(VerifyCodeInput(REFERENCE_SECRET, current)) is True
    assert use_case.execute(VerifyCodeInput(REFERENCE_SECRET, previous)) is False


def test_enroll_uri_carries_non_default_digits_and_period():
    authenticator = Authenticator(8, 10, ANCHOR, 60)

    enrollment = EnrollUseCase(authenticator).execute(EnrollInput(account_name="alice", issuer="A&B Corp"))

    query = parse_qs(urlparse(enrollment.otpauth_uri).query)
    assert query["issuer"] == ["A&B Corp"]
    assert query["digits"] == ["8"]
    assert query["period"] == ["60"]

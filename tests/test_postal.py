import pytest

from zipmiles.postal import InvalidFormatError, normalize_postal_code, validate_postal_code


def test_normalize_strips_and_truncates() -> None:
    assert normalize_postal_code("90210") == "90210"
    assert normalize_postal_code(" 90210-1234 ") == "90210"
    assert normalize_postal_code("ZIP: 1 0 0 0 1") == "10001"


@pytest.mark.parametrize("raw", ["ABCDE", "1234", "", "   ", None, "00000", "00000-1234"])
def test_normalize_rejects_bad_codes(raw) -> None:
    with pytest.raises(InvalidFormatError):
        normalize_postal_code(raw)


def test_invalid_format_is_value_error() -> None:
    with pytest.raises(ValueError):
        normalize_postal_code("12")


def test_validate_plain_code_has_no_warnings() -> None:
    outcome = validate_postal_code("60601")
    assert outcome.is_valid is True
    assert outcome.errors == []
    assert outcome.warnings == []


def test_validate_military_code_warns_but_is_valid() -> None:
    outcome = validate_postal_code("09012")
    assert outcome.is_valid is True
    assert len(outcome.warnings) == 1
    assert "Military" in outcome.warnings[0]


def test_validate_territory_code_warns_but_is_valid() -> None:
    outcome = validate_postal_code("00901")
    assert outcome.is_valid is True
    assert any("territory" in w for w in outcome.warnings)


def test_validate_reports_error() -> None:
    outcome = validate_postal_code("ABCDE")
    assert outcome.is_valid is False
    assert outcome.first_error is not None
    assert str(outcome).startswith("Invalid: ")

import pytest
from pydantic import ValidationError

from gs1scan.core.config import AppSettings

pytestmark = pytest.mark.grp_scan


def test_defaults_keep_14_digit_gtins_and_fail_open(monkeypatch):
    monkeypatch.delenv("GTIN_ALLOWED_LENGTHS", raising=False)
    monkeypatch.delenv("EXPIRY_FAIL_CLOSED", raising=False)
    s = AppSettings(_env_file=None)
    assert s.GTIN_ALLOWED_LENGTHS == [14]
    assert s.EXPIRY_FAIL_CLOSED is False
    assert s.DISPLAY_DATE_SEPARATOR == "-"


def test_gtin_lengths_from_env(monkeypatch):
    monkeypatch.setenv("GTIN_ALLOWED_LENGTHS", "[14, 8, 13, 14]")
    s = AppSettings(_env_file=None)
    assert s.GTIN_ALLOWED_LENGTHS == [8, 13, 14]


@pytest.mark.parametrize("lengths", [[], [10], [14, 15]])
def test_unsupported_gtin_lengths_rejected(lengths):
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None, GTIN_ALLOWED_LENGTHS=lengths)

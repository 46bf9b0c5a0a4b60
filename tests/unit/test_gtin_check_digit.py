import random

import pytest

from gs1scan.domain.enums import GtinErrorCode
from gs1scan.services.gtin import compute_check_digit, validate_gtin

pytestmark = pytest.mark.grp_scan

_WEIGHTS = [3, 1, 3, 1, 3, 1, 3, 1, 3, 1, 3, 1, 3, 1, 3, 1, 3]


def _reference_check_digit(body: str) -> int:
    # 权重表右对齐，按 ceil(sum/10)*10 - sum 计算（10 记为 0）
    j = len(_WEIGHTS) - 1
    total = 0
    for i in range(len(body) - 1, -1, -1):
        total += int(body[i]) * _WEIGHTS[j]
        j -= 1
    digit = -(-total // 10) * 10 - total
    return 0 if digit == 10 else digit


def test_known_valid_gtins():
    for gtin in ("00012345678905", "09501101530003", "00000000000000", "00000000000550"):
        r = validate_gtin(gtin)
        assert r.is_valid is True, gtin
        assert r.error_code is None
        assert r.message == "GTIN is valid"


@pytest.mark.parametrize("seed", range(5))
def test_generated_gtins_with_computed_check_digit_are_valid(seed):
    rnd = random.Random(seed)
    for _ in range(200):
        body = "".join(rnd.choice("0123456789") for _ in range(13))
        gtin = body + str(_reference_check_digit(body))
        assert validate_gtin(gtin).is_valid is True, gtin


def test_compute_check_digit_matches_reference():
    rnd = random.Random(42)
    for _ in range(500):
        body = "".join(rnd.choice("0123456789") for _ in range(13))
        assert compute_check_digit(body) == _reference_check_digit(body)


def test_wrong_check_digit_reports_expected_digit():
    r = validate_gtin("00012345678906")
    assert r.is_valid is False
    assert r.error_code is GtinErrorCode.WRONG_DIGIT
    assert r.message == "Invalid GTIN. Last digit should be 5"


@pytest.mark.parametrize(
    "value",
    ["1", "96385074", "012345678905", "0001234567890", "000123456789050", "0" * 20],
)
def test_any_length_other_than_14_is_rejected(value):
    r = validate_gtin(value)
    assert r.is_valid is False
    assert r.error_code is GtinErrorCode.WRONG_LENGTH
    assert r.message == "GTIN length should be 14"


@pytest.mark.parametrize(
    "value",
    [
        "",
        None,
        12345678901231,
        "0001234567890a",
        " 00012345678905",
        "0001-234567890",
        "١٢٣٤٥٦٧٨٩٠١٢٣٤",
        "0001234567890\n",
        "00012345678905\n",
    ],
)
def test_non_numeric_input_is_wrong_chars(value):
    r = validate_gtin(value)
    assert r.is_valid is False
    assert r.error_code is GtinErrorCode.WRONG_CHARS
    assert r.message == "GTIN should be a numeric value"


def test_shorter_lengths_can_be_enabled_explicitly():
    lengths = (8, 12, 13, 14)
    assert validate_gtin("96385074", allowed_lengths=lengths).is_valid is True
    assert validate_gtin("96385075", allowed_lengths=lengths).error_code is GtinErrorCode.WRONG_DIGIT
    r = validate_gtin("123456789", allowed_lengths=lengths)
    assert r.error_code is GtinErrorCode.WRONG_LENGTH
    assert r.message == "GTIN length should be 8, 12, 13 or 14"


def test_result_wire_shape():
    assert validate_gtin("00012345678906").to_dict() == {
        "isValid": False,
        "message": "Invalid GTIN. Last digit should be 5",
        "errorCode": "gtin_wrong_digit",
    }
    assert validate_gtin("00012345678905").to_dict()["errorCode"] is None


def test_compute_check_digit_rejects_non_digits():
    with pytest.raises(ValueError):
        compute_check_digit("12a4")


def test_compute_check_digit_rejects_trailing_newline():
    with pytest.raises(ValueError):
        compute_check_digit("0001234567890\n")

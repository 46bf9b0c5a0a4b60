import pytest

from gs1scan.utils.logsafe import sanitize_log_message

pytestmark = pytest.mark.grp_scan


def test_newlines_cannot_forge_log_lines():
    assert sanitize_log_message("scan ok\r\nERROR fake line") == "scan ok ERROR fake line"


def test_fnc1_and_control_chars_are_visible():
    assert sanitize_log_message("10AB\x1d21X\x00") == "10AB<GS>21X<0x00>"
    assert sanitize_log_message(b"01\x1d") == "01<GS>"


def test_non_strings_are_json_encoded():
    assert sanitize_log_message({"gtin": "0001"}) == '{"gtin": "0001"}'
    assert sanitize_log_message(None) == "null"


def test_exceptions_are_encoded_with_type():
    out = sanitize_log_message(ValueError("bad\nvalue"))
    assert '"type": "ValueError"' in out
    assert "\n" not in out

import pytest
from fastapi.testclient import TestClient

from gs1scan.core.config import AppSettings, get_settings
from gs1scan.main import app

pytestmark = pytest.mark.grp_api


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def _override(**kw):
    app.dependency_overrides[get_settings] = lambda: AppSettings(**kw)


def test_healthz(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_parse_gs1_returns_record(client):
    r = client.post("/gs1/parse", json={"barcode": "(01)09501101530003(17)250600(10)AB123(21)SN1"})
    assert r.status_code == 200, r.text
    assert r.json() == {
        "gtin": "09501101530003",
        "batchNumber": "AB123",
        "serialNumber": "SN1",
        "expiry": "00 - Jun - 2025",
        "gtinValid": True,
    }


def test_parse_gs1_flags_bad_check_digit(client):
    r = client.post("/gs1/parse", json={"barcode": "(01)09501101530004(10)AB123"})
    assert r.status_code == 200
    body = r.json()
    assert body["gtinValid"] is False
    assert body["expiry"] is None


def test_parse_gs1_without_gtin(client):
    r = client.post("/gs1/parse", json={"barcode": "(10)AB123"})
    assert r.status_code == 200
    assert r.json()["gtinValid"] is None


def test_parse_gs1_uses_display_settings(client):
    _override(DISPLAY_FULL_MONTH_NAME=True, DISPLAY_DATE_SEPARATOR="/")
    r = client.post("/gs1/parse", json={"barcode": "(17)250615"})
    assert r.status_code == 200
    assert r.json()["expiry"] == "15 / June / 2025"


def test_parse_gs1_decode_error_is_problem(client):
    r = client.post("/gs1/parse", json={"barcode": "(99)ABC"})
    assert r.status_code == 422
    body = r.json()
    assert body["error_code"] == "gs1_decode_error"
    assert body["http_status"] == 422
    assert body["details"][0]["type"] == "decode"
    assert body["context"]["path"] == "/gs1/parse"
    assert body["trace_id"].startswith("t_")


def test_request_validation_is_problem(client):
    r = client.post("/gs1/parse", json={})
    assert r.status_code == 422
    body = r.json()
    assert body["error_code"] == "request_validation_error"
    assert body["details"]


def test_gtin_validate(client):
    r = client.post("/gtin/validate", json={"gtin": "00012345678905"})
    assert r.status_code == 200
    assert r.json() == {"isValid": True, "message": "GTIN is valid", "errorCode": None}

    r = client.post("/gtin/validate", json={"gtin": "00012345678906"})
    assert r.json() == {
        "isValid": False,
        "message": "Invalid GTIN. Last digit should be 5",
        "errorCode": "gtin_wrong_digit",
    }

    r = client.post("/gtin/validate", json={"gtin": "96385074"})
    assert r.json()["errorCode"] == "gtin_wrong_length"

    r = client.post("/gtin/validate", json={"gtin": "abc"})
    assert r.json()["errorCode"] == "gtin_wrong_chars"


def test_gtin_validate_with_extended_lengths(client):
    _override(GTIN_ALLOWED_LENGTHS=[8, 13, 14])
    r = client.post("/gtin/validate", json={"gtin": "96385074"})
    assert r.json()["isValid"] is True


def test_expiry_check_known_and_unknown(client):
    r = client.post("/expiry/check", json={"expiry": "200600"})
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "EXPIRED"
    assert body["isExpired"] is True
    assert body["expiresAt"] == "2020-06-30T23:59:59.999"
    assert body["display"] == "06/2020"
    assert isinstance(body["expiryTime"], int)

    r = client.post("/expiry/check", json={"expiry": "notadate"})
    body = r.json()
    assert body["status"] == "UNKNOWN"
    assert body["isExpired"] is False
    assert body["expiresAt"] is None and body["expiryTime"] is None


def test_expiry_check_fail_closed(client):
    _override(EXPIRY_FAIL_CLOSED=True)
    r = client.post("/expiry/check", json={"expiry": "notadate"})
    assert r.json()["isExpired"] is True


def test_expiry_check_future_date(client):
    r = client.post("/expiry/check", json={"expiry": "991200"})
    body = r.json()
    assert body["status"] == "VALID"
    assert body["isExpired"] is False

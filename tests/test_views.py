import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from .rows import DELIMITED_ROW_1, DELIMITED_ROW_2, FIXED_ROW, FOOTER, HEADER

PARSE_URL = "/api/parse/"
UPDATE_URL = "/api/update-receipt/"
SEARCH_URL = "/api/search/"


def post_json(client, url, payload, **extra):
    return client.post(url, payload, content_type="application/json", **extra)


@pytest.fixture(autouse=True)
def open_api(settings):
    settings.PCN_API_TOKEN = ""
    settings.PCN_LAYOUT = "delimited"


def test_index(client):
    response = client.get("/api/")
    assert response.status_code == 200
    body = response.json()
    assert set(body["layouts"]) == {"fixed", "delimited"}
    assert body["default_layout"] == "delimited"


def test_parse_json(client, delimited_file):
    response = post_json(client, PARSE_URL, {"file_content": delimited_file})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["total_receipts"] == 3
    assert data["layout"] == "delimited"
    first = data["receipts"][0]
    assert first["row_index"] == 0
    assert first["line_number"] == 2
    assert first["business_number"] == "424673351"
    assert first["receipt_number"] == "14"
    assert first["allocation_number"] == "000000001"
    assert first["display"] == {
        "business_number": "424673351",
        "date": "2025-11-02",
        "receipt_number": "14",
        "vat_amount": "7.19",
        "sum_without_vat": "123.45",
        "allocation_number": "000000001",
    }


def test_parse_upload_fixed_layout(client, fixed_file):
    upload = SimpleUploadedFile("pcn874.txt", fixed_file.encode("ascii"))
    response = client.post(PARSE_URL, {"file": upload, "layout": "fixed"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["file_name"] == "pcn874.txt"
    assert [r["receipt_number"] for r in data["receipts"]] == ["6394", "6395"]
    assert data["receipts"][0]["display"]["vat_amount"] == "45.76"


def test_parse_reports_invalid_rows(client):
    content = "\n".join([FIXED_ROW, FIXED_ROW[:58]])
    response = post_json(client, PARSE_URL, {"file_content": content, "layout": "fixed"})
    data = response.json()["data"]
    assert data["total_receipts"] == 1
    assert data["errors"][0]["message"] == "Line 2: Invalid receipt row format"


def test_parse_without_receipts(client):
    response = post_json(client, PARSE_URL, {"file_content": HEADER + "\n" + FOOTER})
    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": "No valid receipt rows found in file",
        "code": "NO_RECEIPTS",
    }


def test_parse_bad_json(client):
    response = client.post(PARSE_URL, "{not json", content_type="application/json")
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_parse_json_must_be_object(client):
    response = client.post(PARSE_URL, "[1, 2]", content_type="application/json")
    assert response.status_code == 400
    assert response.json()["error"] == "Request body must be a JSON object"


def test_parse_row_ceiling(client, settings, delimited_file):
    settings.PCN_MAX_ROWS = 3
    response = post_json(client, PARSE_URL, {"file_content": delimited_file})
    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["field"] == "file_content"


def test_update_receipt(client, delimited_file):
    response = post_json(client, UPDATE_URL, {
        "file_content": delimited_file,
        "row_index": 1,
        "allocation_number": "42",
    })
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["modified_receipt"]["allocation_number"] == "000000042"
    assert data["modified_receipt"]["line_number"] == 3
    lines = data["modified_content"].split("\r\n")
    assert lines[2] == DELIMITED_ROW_2[:-9] + "000000042"
    assert lines[1] == DELIMITED_ROW_1


def test_update_unknown_row(client, delimited_file):
    response = post_json(client, UPDATE_URL, {
        "file_content": delimited_file,
        "row_index": 3,
        "allocation_number": "42",
    })
    assert response.status_code == 400
    assert response.json()["code"] == "ROW_NOT_FOUND"


def test_update_invalid_allocation(client, delimited_file):
    response = post_json(client, UPDATE_URL, {
        "file_content": delimited_file,
        "row_index": 0,
        "allocation_number": "abc",
    })
    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["field"] == "allocation_number"


def test_update_requires_content(client):
    response = post_json(client, UPDATE_URL, {"row_index": 0, "allocation_number": "1"})
    assert response.status_code == 400
    assert response.json()["error"] == "File content is required"


def test_search_by_number(client, delimited_file):
    response = post_json(client, SEARCH_URL, {"file_content": delimited_file, "receipt_number": "0014"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["total"] == 2
    assert [r["business_number"] for r in data["receipts"]] == ["424673351", "514567890"]


def test_search_by_number_and_business(client, delimited_file):
    response = post_json(client, SEARCH_URL, {
        "file_content": delimited_file,
        "receipt_number": "14",
        "business_number": "514567890",
    })
    assert response.json()["data"]["receipt"]["line_number"] == 3


def test_search_no_match(client, delimited_file):
    response = post_json(client, SEARCH_URL, {
        "file_content": delimited_file,
        "receipt_number": "14",
        "business_number": "111111111",
    })
    assert response.status_code == 200
    assert response.json()["data"] == {"receipt": None}


def test_token_required(client, settings, delimited_file):
    settings.PCN_API_TOKEN = "s3cret"
    response = post_json(client, PARSE_URL, {"file_content": delimited_file})
    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"

    response = post_json(client, PARSE_URL, {"file_content": delimited_file},
                         HTTP_AUTHORIZATION="Token wrong")
    assert response.status_code == 401

    response = post_json(client, PARSE_URL, {"file_content": delimited_file},
                         HTTP_AUTHORIZATION="Token s3cret")
    assert response.status_code == 200


def test_get_not_allowed_on_parse(client):
    assert client.get(PARSE_URL).status_code == 405

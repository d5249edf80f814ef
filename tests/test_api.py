import io

import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from dataengine.config import EXCEL_MEDIA_TYPE
from dataengine.data.store import DataStore
from dataengine.main import create_app


@pytest.fixture
def client():
    with TestClient(create_app(DataStore())) as c:
        yield c


@pytest.fixture
def loaded(client, people_csv):
    response = client.post("/load", json={"path": str(people_csv)})
    assert response.status_code == 200
    return client


def test_health_when_empty(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["loaded"] is False
    assert body["rows"] == 0


@pytest.mark.parametrize("path", ["/data", "/data?start=0&limit=5", "/summary", "/columns", "/summary/export"])
def test_queries_before_load_are_404(client, path):
    response = client.get(path)
    assert response.status_code == 404
    assert response.json()["error"] == "NotLoaded"


def test_load_success(client, people_csv):
    response = client.post("/load", json={"path": str(people_csv)})
    assert response.status_code == 200
    assert response.json() == {
        "status": "loaded",
        "path": str(people_csv),
        "rows": 3,
        "columns": 2,
        "generation": 1,
    }
    health = client.get("/health").json()
    assert health["loaded"] is True
    assert health["source"] == str(people_csv)
    assert health["loaded_at"]


def test_data_first_page(loaded):
    response = loaded.get("/data", params={"start": "0", "limit": "2"})
    assert response.status_code == 200
    body = response.json()
    assert body["columns"] == ["name", "age"]
    assert body["records"] == [["Alice", 30], ["Bob", None]]
    assert body["total"] == 3
    assert (body["start"], body["limit"]) == (0, 2)
    assert body["message"] is None


def test_data_invalid_params_fall_back_to_defaults(loaded):
    body = loaded.get("/data", params={"start": "abc", "limit": "-4"}).json()
    assert (body["start"], body["limit"]) == (0, 100)
    assert len(body["records"]) == 3

    body = loaded.get("/data", params={"limit": "99999"}).json()
    assert body["limit"] == 1000


def test_data_past_end_is_empty_not_error(loaded):
    response = loaded.get("/data", params={"start": "10"})
    assert response.status_code == 200
    body = response.json()
    assert body["records"] == []
    assert body["total"] == 3
    assert body["message"] == "No data in specified range"


def test_summary(loaded):
    response = loaded.get("/summary")
    assert response.status_code == 200
    body = response.json()
    assert body["rows"] == 3
    name, age = body["columns"]
    assert name["type"] == "categorical"
    assert name["distinct_count"] == 3
    assert age["type"] == "numeric"
    assert (age["count"], age["null_count"]) == (2, 1)
    assert (age["min"], age["max"], age["mean"]) == (25, 30, 27.5)
    assert isinstance(age["stddev"], float)


def test_summary_null_aggregates_are_json_null(client, write_csv):
    path = write_csv("id,score\na,\nb,\n", "nulls.csv")
    assert client.post("/load", json={"path": str(path)}).status_code == 200
    score = client.get("/summary").json()["columns"][1]
    assert score["count"] == 0
    assert score["null_count"] == 2
    assert score["mean"] is None
    assert score["stddev"] is None


def test_columns(loaded):
    assert loaded.get("/columns").json() == {
        "columns": [{"name": "name", "type": "categorical"}, {"name": "age", "type": "numeric"}],
    }


@pytest.mark.parametrize(
    "text, kind",
    [
        ("a,b\n1,2\n3\n", "MalformedRow"),
        ("a,a\n1,2\n", "DuplicateColumn"),
        ('a,b\n"x"y,1\n', "SyntaxError"),
    ],
)
def test_load_invalid_csv(client, write_csv, text, kind):
    path = write_csv(text, "bad.csv")
    response = client.post("/load", json={"path": str(path)})
    assert response.status_code == 500
    assert response.json()["error"] == kind


def test_load_missing_file(client, tmp_path):
    response = client.post("/load", json={"path": str(tmp_path / "missing.csv")})
    assert response.status_code == 500
    assert response.json()["error"] == "IOFailure"


def test_load_empty_path_is_invalid_request(client):
    response = client.post("/load", json={"path": "   "})
    assert response.status_code == 400
    assert response.json()["error"] == "InvalidRequest"


def test_load_bad_body_is_rejected(client):
    assert client.post("/load", json={"file": "x.csv"}).status_code == 422
    assert client.post("/load", content=b"not json", headers={"Content-Type": "application/json"}).status_code == 422


def test_failed_load_keeps_previous_dataset(loaded, write_csv):
    bad = write_csv("a,b\n1\n", "bad.csv")
    assert loaded.post("/load", json={"path": str(bad)}).status_code == 500
    body = loaded.get("/data").json()
    assert body["total"] == 3
    assert loaded.get("/health").json()["generation"] == 1


def test_reload_replaces_dataset(loaded, write_csv):
    other = write_csv("x\n1\n2\n3\n4\n", "other.csv")
    response = loaded.post("/load", json={"path": str(other)})
    assert response.json()["generation"] == 2
    body = loaded.get("/data").json()
    assert body["columns"] == ["x"]
    assert body["total"] == 4


def test_header_only_csv_is_loaded_but_empty(client, write_csv):
    path = write_csv("a,b\n", "header.csv")
    assert client.post("/load", json={"path": str(path)}).status_code == 200
    body = client.get("/data").json()
    assert body["records"] == []
    assert body["total"] == 0


def test_summary_export(loaded):
    response = loaded.get("/summary/export", params={"limit": "2"})
    assert response.status_code == 200
    assert response.headers["content-type"] == EXCEL_MEDIA_TYPE
    wb = load_workbook(io.BytesIO(response.content))
    assert wb.sheetnames == ["Summary", "Data"]
    data = wb["Data"]
    assert data["A5"].value == "Alice"
    assert data["A7"].value is None


def test_preload_at_startup(people_csv):
    with TestClient(create_app(DataStore(), preload=str(people_csv))) as c:
        assert c.get("/health").json()["rows"] == 3
        assert c.get("/data").json()["total"] == 3


def test_failed_preload_starts_empty(tmp_path):
    with TestClient(create_app(DataStore(), preload=str(tmp_path / "missing.csv"))) as c:
        assert c.get("/health").json()["loaded"] is False
        assert c.get("/data").status_code == 404


def test_summary_export_with_control_characters(client, write_csv):
    path = write_csv("name,v\nbell\x07here,1\n", "ctl.csv")
    assert client.post("/load", json={"path": str(path)}).status_code == 200
    response = client.get("/summary/export")
    assert response.status_code == 200
    wb = load_workbook(io.BytesIO(response.content))
    assert wb["Data"]["A5"].value == "bellhere"

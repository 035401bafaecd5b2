from __future__ import annotations

import io
import json

from PIL import Image

from binsurvey.errors import StorageError
from binsurvey.services.storage import MemStorage

PAYLOAD = {
    "street": "Kanari",
    "latitude": 37.8702,
    "longitude": 23.7551,
    "binTypes": ["Green", "Green", "Blue"],
    "quantity": 3,
}


def _png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), "green").save(buf, format="PNG")
    return buf.getvalue()


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


def test_create_and_fetch(client):
    res = client.post("/entries", json=PAYLOAD)

    assert res.status_code == 201
    body = res.json()
    assert body["id"] == 1
    assert body["synced"] is False
    assert body["binTypes"] == ["Green", "Green", "Blue"]
    assert body["municipality"] == "Glyfada"
    assert body["photoUri"] is None
    assert body["comments"] is None
    assert client.get(f"/entries/{body['id']}").json() == body


def test_create_from_bin_counts(client):
    payload = {k: v for k, v in PAYLOAD.items() if k not in ("binTypes", "quantity")}
    payload["binCounts"] = {"Green": 2, "Blue": 1, "Brown": 0, "Yellow": 0}

    body = client.post("/entries", json=payload).json()

    assert body["binTypes"] == ["Green", "Green", "Blue"]
    assert body["quantity"] == 3


def test_create_invalid_returns_field_errors(client):
    res = client.post("/entries", json={**PAYLOAD, "street": "", "binTypes": [], "quantity": 0})

    assert res.status_code == 400
    body = res.json()
    assert body["message"] == "Invalid data"
    fields = {err["loc"][-1] for err in body["errors"]}
    assert {"street", "binTypes", "quantity"} <= fields


def test_create_unknown_bin_type_rejected(client):
    res = client.post("/entries", json={**PAYLOAD, "binTypes": ["Purple"]})

    assert res.status_code == 400


def test_create_multipart_with_photo(client, tmp_path):
    form = {k: str(v) for k, v in PAYLOAD.items() if k != "binTypes"}
    form["binTypes"] = json.dumps(PAYLOAD["binTypes"])
    form["comments"] = "behind the bakery"

    res = client.post("/entries", data=form, files={"photo": ("bin.png", _png_bytes(), "image/png")})

    assert res.status_code == 201
    body = res.json()
    assert body["photoUri"].startswith("/uploads/")
    assert body["photoUri"].endswith(".png")
    assert body["quantity"] == 3
    assert body["comments"] == "behind the bakery"
    assert (tmp_path / body["photoUri"].rsplit("/", 1)[-1]).exists()


def test_create_multipart_rejects_non_image(client, tmp_path):
    form = {k: str(v) for k, v in PAYLOAD.items() if k != "binTypes"}
    form["binTypes"] = json.dumps(PAYLOAD["binTypes"])

    res = client.post("/entries", data=form, files={"photo": ("notes.txt", b"not an image", "text/plain")})

    assert res.status_code == 400
    assert list(tmp_path.iterdir()) == []


def test_get_missing_is_404(client):
    assert client.get("/entries/99").status_code == 404


def test_list_newest_first(client):
    ids = [client.post("/entries", json=PAYLOAD).json()["id"] for _ in range(3)]

    listed = client.get("/entries").json()

    assert [e["id"] for e in listed] == list(reversed(ids))


def test_patch_entry(client):
    entry = client.post("/entries", json=PAYLOAD).json()

    res = client.patch(f"/entries/{entry['id']}", json={"quantity": 5, "comments": "two more found"})

    assert res.status_code == 200
    body = res.json()
    assert body["quantity"] == 5
    assert body["comments"] == "two more found"
    assert body["street"] == "Kanari"
    assert body["datetime"] == entry["datetime"]


def test_patch_cannot_unsync(client):
    entry = client.post("/entries", json=PAYLOAD).json()
    client.patch(f"/entries/{entry['id']}/sync")

    res = client.patch(f"/entries/{entry['id']}", json={"synced": False})

    assert res.status_code == 400
    assert client.get(f"/entries/{entry['id']}").json()["synced"] is True


def test_patch_missing_is_404(client):
    assert client.patch("/entries/42", json={"quantity": 2}).status_code == 404


def test_delete_entry(client):
    entry = client.post("/entries", json=PAYLOAD).json()

    assert client.delete(f"/entries/{entry['id']}").status_code == 204
    assert client.delete(f"/entries/{entry['id']}").status_code == 404


def test_sync_flow(client):
    entry = client.post("/entries", json=PAYLOAD).json()
    assert [e["id"] for e in client.get("/entries/unsynced").json()] == [entry["id"]]

    res = client.patch(f"/entries/{entry['id']}/sync")

    assert res.status_code == 200
    assert client.get("/entries/unsynced").json() == []
    assert client.get("/entries").json()[0]["synced"] is True
    assert client.patch("/entries/77/sync").status_code == 404


def test_reset_street(client):
    for street in ("Agias Lavras", "Agias Lavras", "Kanari"):
        client.post("/entries", json={**PAYLOAD, "street": street})

    res = client.delete("/streets/Agias Lavras/reset")

    assert res.status_code == 200
    assert res.json() == {"message": "Deleted 2 entries for Agias Lavras", "deletedCount": 2}
    assert [e["street"] for e in client.get("/entries").json()] == ["Kanari"]


def test_street_options_nearby(client):
    res = client.get("/streets", params={"mode": "nearby", "latitude": 37.8667, "longitude": 23.7667})

    body = res.json()
    assert body["nearbyAvailable"] is True
    assert 0 < len(body["streets"]) <= 15
    assert all(s["distanceKm"] <= 2 for s in body["streets"])


def test_street_options_without_fix(client):
    body = client.get("/streets").json()

    assert body["mode"] == "nearby"
    assert body["nearbyAvailable"] is False
    assert body["streets"] == []


def test_street_options_search_and_all(client):
    search = client.get("/streets", params={"mode": "search", "q": "metaxa"}).json()
    everything = client.get("/streets", params={"mode": "all"}).json()

    assert [s["street"] for s in search["streets"]] == ["Leoforos Metaxa", "Metaxa"]
    assert len(everything["streets"]) == 50


def test_street_options_unknown_municipality(client):
    assert client.get("/streets", params={"municipality": "Atlantis"}).status_code == 404


def test_municipalities(client):
    (glyfada,) = client.get("/streets/municipalities").json()

    assert glyfada["name"] == "Glyfada"
    assert glyfada["streetCount"] == 198


def test_export_csv(client):
    client.post("/entries", json={**PAYLOAD, "comments": "near school"})

    res = client.get("/export/csv")

    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/csv")
    assert res.headers["content-disposition"].startswith('attachment; filename="waste-bin-survey-')
    lines = res.text.split("\n")
    assert lines[0] == "ID,Date/Time,Street,Latitude,Longitude,Bin Types,Quantity,Comments,Synced"
    assert '"Kanari"' in lines[1]
    assert lines[1].endswith('"Green, Green, Blue",3,"near school",false')


def test_export_geojson(client):
    client.post("/entries", json=PAYLOAD)

    res = client.get("/export/geojson")

    assert res.headers["content-type"].startswith("application/geo+json")
    assert res.headers["content-disposition"].endswith('.geojson"')
    (feat,) = res.json()["features"]
    assert feat["geometry"]["coordinates"] == [23.7551, 37.8702]
    assert feat["properties"]["binTypes"] == ["Green", "Green", "Blue"]


def test_export_shapefile(client):
    client.post("/entries", json=PAYLOAD)

    res = client.get("/export/shapefile")

    assert res.status_code == 200
    assert res.headers["content-type"] == "application/zip"
    assert res.content[:2] == b"PK"


def test_export_shapefile_unknown_epsg(client):
    assert client.get("/export/shapefile", params={"target_epsg": 1}).status_code == 400


def test_street_report(client):
    client.post("/entries", json={**PAYLOAD, "street": "Kanari", "quantity": 2, "binTypes": ["Green"]})
    client.post("/entries", json={**PAYLOAD, "street": "Solomou", "quantity": 7, "binTypes": ["Brown"]})

    report = client.get("/report/streets").json()
    csv_res = client.get("/report/streets/csv")

    assert [r["street"] for r in report] == ["Solomou", "Kanari"]
    assert report[0]["totalBins"] == 7
    assert report[0]["binCounts"]["Brown"] == 1
    assert csv_res.text.split("\n")[0] == "Street,Total Bins,Green,Blue,Brown,Yellow,Surveys,Last Survey"


class BrokenStorage(MemStorage):
    def get_all_entries(self):
        raise StorageError("get_all_entries")


def test_storage_failure_is_generic_500(client):
    from binsurvey.api.deps import get_storage

    client.app.dependency_overrides[get_storage] = BrokenStorage

    res = client.get("/entries")

    assert res.status_code == 500
    assert res.json() == {"message": "Storage failure"}


def test_patch_multipart_photo_replaces_uri(client, tmp_path):
    entry = client.post("/entries", json={**PAYLOAD, "photoUri": "/uploads/old.png"}).json()

    res = client.patch(
        f"/entries/{entry['id']}",
        data={"comments": "new angle"},
        files={"photo": ("new.jpg", _png_bytes(), "image/jpeg")},
    )

    assert res.status_code == 200
    body = res.json()
    assert body["photoUri"] != "/uploads/old.png"
    assert body["photoUri"].endswith(".jpg")
    assert body["comments"] == "new angle"
    assert (tmp_path / body["photoUri"].rsplit("/", 1)[-1]).exists()


def test_reset_street_with_slash_in_name(client):
    client.post("/entries", json={**PAYLOAD, "street": "25is Martiou/Kanari"})
    client.post("/entries", json=PAYLOAD)

    res = client.delete("/streets/25is%20Martiou%2FKanari/reset")

    assert res.status_code == 200
    assert res.json()["deletedCount"] == 1
    assert [e["street"] for e in client.get("/entries").json()] == ["Kanari"]


def test_export_shapefile_unknown_encoding(client):
    client.post("/entries", json=PAYLOAD)

    res = client.get("/export/shapefile", params={"encoding": "no-such-codec"})

    assert res.status_code == 400

"""Hospital listing, search and lookup endpoints."""


def _names(resp):
    return [h["name"] for h in resp.json()]


class TestHospitalListing:
    def test_list_returns_seeded_hospitals_in_storage_order(self, client):
        resp = client.get("/api/hospitals")
        assert resp.status_code == 200
        assert _names(resp) == ["Central Hospital", "City Medical Center"]

    def test_list_uses_camel_case_fields(self, client):
        hospital = client.get("/api/hospitals").json()[0]
        assert "averageRating" in hospital
        assert "ratingCount" in hospital
        assert "priceRange" in hospital
        assert "average_rating" not in hospital

    def test_list_with_q_filters(self, client):
        resp = client.get("/api/hospitals", params={"q": "uptown"})
        assert resp.status_code == 200
        assert _names(resp) == ["City Medical Center"]


class TestHospitalSearch:
    def test_cardio_matches_only_city_medical_center(self, client):
        resp = client.get("/api/hospitals/search", params={"query": "cardio"})
        assert resp.status_code == 200
        assert _names(resp) == ["City Medical Center"]

    def test_search_is_case_insensitive(self, client):
        resp = client.get("/api/hospitals/search", params={"query": "PEDIATRICS"})
        assert _names(resp) == ["Central Hospital"]

    def test_search_matches_location_and_city(self, client):
        assert _names(client.get("/api/hospitals/search", params={"query": "downtown"})) == [
            "Central Hospital"
        ]
        assert len(client.get("/api/hospitals/search", params={"query": "city"}).json()) == 2

    def test_search_without_match_returns_empty_list(self, client):
        resp = client.get("/api/hospitals/search", params={"query": "dermatology"})
        assert resp.status_code == 200
        assert resp.json() == []

    def test_missing_query_is_rejected(self, client):
        resp = client.get("/api/hospitals/search")
        assert resp.status_code == 400
        assert resp.json()["error"] == "Search query is required"

    def test_blank_query_is_rejected(self, client):
        resp = client.get("/api/hospitals/search", params={"query": "   "})
        assert resp.status_code == 400
        assert "error" in resp.json()

    def test_sql_fragments_are_plain_text(self, client):
        resp = client.get("/api/hospitals/search", params={"query": "' OR 1=1 --"})
        assert resp.status_code == 200
        assert resp.json() == []

    def test_like_wildcards_match_literally(self, client):
        for term in ("%", "_", "c_ty", "car%io", "\\"):
            resp = client.get("/api/hospitals/search", params={"query": term})
            assert resp.status_code == 200
            assert resp.json() == [], term

    def test_literal_percent_and_underscore_are_found(self, client, admin_headers):
        client.post(
            "/api/hospitals",
            json={"name": "Rift_Valley 100% Care", "location": "Nakuru"},
            headers=admin_headers,
        )
        assert _names(client.get("/api/hospitals/search", params={"query": "100%"})) == [
            "Rift_Valley 100% Care"
        ]
        assert _names(client.get("/api/hospitals/search", params={"query": "t_v"})) == [
            "Rift_Valley 100% Care"
        ]

    def test_search_folds_non_ascii_case(self, client, admin_headers):
        client.post(
            "/api/hospitals",
            json={"name": "ÉCOLE Clinic", "location": "Mombasa"},
            headers=admin_headers,
        )
        resp = client.get("/api/hospitals/search", params={"query": "école"})
        assert _names(resp) == ["ÉCOLE Clinic"]

    def test_over_long_query_is_rejected(self, client):
        resp = client.get("/api/hospitals/search", params={"query": "cardio" * 50})
        assert resp.status_code == 400
        assert "at most" in resp.json()["error"]
        assert "query" in resp.json()["fields"]


class TestHospitalLookup:
    def test_get_by_id_is_idempotent(self, client):
        first = client.get("/api/hospitals/2")
        second = client.get("/api/hospitals/2")
        assert first.status_code == 200
        assert first.json() == second.json()
        assert first.json()["name"] == "City Medical Center"

    def test_unknown_id_is_not_found(self, client):
        resp = client.get("/api/hospitals/999")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Hospital not found"}

    def test_non_numeric_id_is_a_client_error(self, client):
        resp = client.get("/api/hospitals/abc")
        assert resp.status_code == 400
        assert "hospital_id" in resp.json()["fields"]

    def test_get_by_name(self, client):
        resp = client.get("/api/hospitals/name/Central Hospital")
        assert resp.status_code == 200
        assert resp.json()["id"] == 1

    def test_get_by_unknown_name(self, client):
        assert client.get("/api/hospitals/name/Nowhere").status_code == 404


class TestHospitalAdmin:
    new_hospital = {
        "name": "Aga Khan University Hospital",
        "location": "Parklands, Nairobi",
        "city": "Nairobi",
        "state": "Nairobi County",
        "specialties": "Oncology, Cardiology",
        "accreditations": "JCI",
        "priceRange": "budget",
    }

    def test_create_requires_token(self, client):
        resp = client.post("/api/hospitals", json=self.new_hospital)
        assert resp.status_code == 401
        assert resp.json()["error"] == "Access token required"

    def test_create_requires_admin_role(self, client, user_headers):
        resp = client.post("/api/hospitals", json=self.new_hospital, headers=user_headers)
        assert resp.status_code == 403

    def test_admin_create_update_delete(self, client, admin_headers):
        created = client.post("/api/hospitals", json=self.new_hospital, headers=admin_headers)
        assert created.status_code == 201
        hospital = created.json()
        assert hospital["priceRange"] == "budget"
        assert hospital["ratingCount"] == 0

        updated = client.put(
            f"/api/hospitals/{hospital['id']}",
            json={"description": "Teaching hospital"},
            headers=admin_headers,
        )
        assert updated.status_code == 200
        assert updated.json()["description"] == "Teaching hospital"
        assert updated.json()["name"] == self.new_hospital["name"]

        deleted = client.delete(f"/api/hospitals/{hospital['id']}", headers=admin_headers)
        assert deleted.status_code == 204
        assert client.get(f"/api/hospitals/{hospital['id']}").status_code == 404

    def test_create_without_name_names_the_field(self, client, admin_headers):
        resp = client.post("/api/hospitals", json={"location": "Nairobi"}, headers=admin_headers)
        assert resp.status_code == 400
        assert "name" in resp.json()["fields"]

    def test_update_unknown_hospital(self, client, admin_headers):
        resp = client.put("/api/hospitals/999", json={"city": "Mombasa"}, headers=admin_headers)
        assert resp.status_code == 404

    def test_delete_unknown_hospital(self, client, admin_headers):
        assert client.delete("/api/hospitals/999", headers=admin_headers).status_code == 404


class TestHospitalImageUpload:
    png = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32

    def test_admin_uploads_image(self, client, admin_headers):
        resp = client.post(
            "/api/hospitals/upload-image",
            files={"image": ("ward.png", self.png, "image/png")},
            headers=admin_headers,
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["imageUrl"] == f"/uploads/{body['filename']}"
        assert body["filename"].endswith(".png")

        served = client.get(body["imageUrl"])
        assert served.status_code == 200
        assert served.content == self.png

    def test_upload_requires_admin(self, client, user_headers):
        resp = client.post(
            "/api/hospitals/upload-image",
            files={"image": ("ward.png", self.png, "image/png")},
            headers=user_headers,
        )
        assert resp.status_code == 403

    def test_missing_file_is_rejected(self, client, admin_headers):
        resp = client.post("/api/hospitals/upload-image", headers=admin_headers)
        assert resp.status_code == 400
        assert resp.json()["error"] == "No image file provided"

    def test_non_image_is_rejected(self, client, admin_headers):
        resp = client.post(
            "/api/hospitals/upload-image",
            files={"image": ("brochure.pdf", b"%PDF-1.4", "application/pdf")},
            headers=admin_headers,
        )
        assert resp.status_code == 400
        assert "image" in resp.json()["fields"]

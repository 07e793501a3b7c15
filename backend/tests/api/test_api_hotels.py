"""
酒店管理 API 测试
覆盖 /api/hotels 端点
"""
from datetime import timedelta
from fastapi.testclient import TestClient

from backoffice.models.entities import Hotel, RoomType, RateAdjustment
from backoffice.services.hotel_service import HotelService


class TestListHotels:

    def test_empty(self, client: TestClient, auth_headers):
        response = client.get("/api/hotels", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"hotels": []}

    def test_newest_first(self, client: TestClient, auth_headers):
        first = client.post("/api/hotels", headers=auth_headers,
                            json={"name": "First", "location": "Austin"}).json()
        second = client.post("/api/hotels", headers=auth_headers,
                             json={"name": "Second", "location": "Denver"}).json()

        hotels = client.get("/api/hotels", headers=auth_headers).json()["hotels"]
        assert [h["id"] for h in hotels] == [second["id"], first["id"]]
        assert set(hotels[0]) == {"id", "name", "location", "status", "created_at"}

    def test_filter_by_status(self, client: TestClient, auth_headers):
        client.post("/api/hotels", headers=auth_headers,
                    json={"name": "Open", "location": "A"})
        client.post("/api/hotels", headers=auth_headers,
                    json={"name": "Closed", "location": "B", "status": "inactive"})

        response = client.get("/api/hotels?status=inactive", headers=auth_headers)
        assert [h["name"] for h in response.json()["hotels"]] == ["Closed"]


class TestCreateHotel:

    def test_create(self, client: TestClient, auth_headers):
        response = client.post("/api/hotels", headers=auth_headers,
                               json={"name": "Harbor Inn", "location": "Seattle"})

        assert response.status_code == 201
        data = response.json()
        assert data["id"] > 0
        assert data["name"] == "Harbor Inn"
        assert data["status"] == "active"
        assert data["created_at"].endswith("Z")

    def test_create_inactive(self, client: TestClient, auth_headers):
        response = client.post("/api/hotels", headers=auth_headers,
                               json={"name": "Old Lodge", "location": "Reno", "status": "inactive"})
        assert response.status_code == 201
        assert response.json()["status"] == "inactive"

    def test_validation_message_is_field_qualified(self, client: TestClient, auth_headers):
        response = client.post("/api/hotels", headers=auth_headers,
                               json={"name": "", "status": "closed"})

        assert response.status_code == 400
        error = response.json()["error"]
        assert "name: " in error
        assert "location: Field required" in error
        assert "status: " in error
        assert error.count("; ") == 2


class TestGetHotel:

    def test_with_room_types_and_rates(self, client: TestClient, auth_headers, sample_hotel,
                                       sample_room_type, sample_room_type_deluxe,
                                       make_adjustment, now):
        make_adjustment(sample_room_type, now - timedelta(days=10), "-10", "Promo")

        response = client.get(f"/api/hotels/{sample_hotel.id}", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["hotel"]["name"] == "Demo Hotel"
        standard, deluxe = data["room_types"]
        assert standard["id"] == sample_room_type.id
        assert standard["base_rate"] == 120.0
        assert standard["effective_rate"] == 110.0
        assert standard["last_adjustment"]["reason"] == "Promo"
        assert standard["last_adjustment"]["adjustment_amount"] == -10.0
        assert deluxe["effective_rate"] == 180.0
        assert deluxe["last_adjustment"] is None

    def test_not_found(self, client: TestClient, auth_headers):
        response = client.get("/api/hotels/9999", headers=auth_headers)
        assert response.status_code == 404
        assert response.json() == {"error": "Hotel not found"}


class TestUpdateHotel:

    def test_partial_update(self, client: TestClient, auth_headers, sample_hotel):
        response = client.put(f"/api/hotels/{sample_hotel.id}", headers=auth_headers,
                              json={"status": "inactive"})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "inactive"
        assert data["name"] == "Demo Hotel"
        assert data["location"] == "NYC"

    def test_empty_payload_reports_no_changes(self, client: TestClient, auth_headers,
                                              sample_hotel, db_session):
        response = client.put(f"/api/hotels/{sample_hotel.id}", headers=auth_headers, json={})

        assert response.status_code == 200
        assert response.json() == {"message": "No changes"}
        hotel = db_session.query(Hotel).filter(Hotel.id == sample_hotel.id).first()
        assert (hotel.name, hotel.location, hotel.status) == ("Demo Hotel", "NYC", "active")

    def test_null_fields_are_ignored(self, client: TestClient, auth_headers, sample_hotel):
        response = client.put(f"/api/hotels/{sample_hotel.id}", headers=auth_headers,
                              json={"name": None})
        assert response.json() == {"message": "No changes"}

    def test_invalid_status(self, client: TestClient, auth_headers, sample_hotel):
        response = client.put(f"/api/hotels/{sample_hotel.id}", headers=auth_headers,
                              json={"status": "archived"})
        assert response.status_code == 400
        assert response.json()["error"].startswith("status: ")

    def test_not_found(self, client: TestClient, auth_headers):
        response = client.put("/api/hotels/9999", headers=auth_headers, json={"name": "X"})
        assert response.status_code == 404

    def test_row_removed_before_update(self, client: TestClient, auth_headers, monkeypatch):
        # 存在性检查通过后记录被并发删除
        monkeypatch.setattr(HotelService, "get_hotel", lambda self, hotel_id: object())

        response = client.put("/api/hotels/9999", headers=auth_headers, json={"name": "X"})
        assert response.status_code == 404
        assert response.json() == {"error": "Hotel not found"}


class TestDeleteHotel:

    def test_delete_cascades(self, client: TestClient, auth_headers, db_session, sample_hotel,
                             sample_room_type, make_adjustment, now):
        make_adjustment(sample_room_type, now, "15")

        response = client.delete(f"/api/hotels/{sample_hotel.id}", headers=auth_headers)

        assert response.status_code == 204
        assert response.content == b""
        assert db_session.query(Hotel).count() == 0
        assert db_session.query(RoomType).count() == 0
        assert db_session.query(RateAdjustment).count() == 0

    def test_delete_twice(self, client: TestClient, auth_headers, sample_hotel):
        assert client.delete(f"/api/hotels/{sample_hotel.id}", headers=auth_headers).status_code == 204
        response = client.delete(f"/api/hotels/{sample_hotel.id}", headers=auth_headers)
        assert response.status_code == 404
        assert response.json() == {"error": "Hotel not found"}


class TestHotelRoomTypes:

    def test_list(self, client: TestClient, auth_headers, sample_hotel,
                  sample_room_type, sample_room_type_deluxe):
        response = client.get(f"/api/hotels/{sample_hotel.id}/room-types", headers=auth_headers)

        assert response.status_code == 200
        names = [rt["name"] for rt in response.json()["room_types"]]
        assert names == ["Standard", "Deluxe"]

    def test_list_for_missing_hotel(self, client: TestClient, auth_headers):
        response = client.get("/api/hotels/9999/room-types", headers=auth_headers)
        assert response.status_code == 404

    def test_create(self, client: TestClient, auth_headers, sample_hotel):
        response = client.post(f"/api/hotels/{sample_hotel.id}/room-types", headers=auth_headers,
                               json={"name": "Suite", "base_rate": 349.99})

        assert response.status_code == 201
        data = response.json()
        assert data["hotel_id"] == sample_hotel.id
        assert data["base_rate"] == 349.99
        assert data["effective_rate"] == 349.99
        assert data["last_adjustment"] is None

    def test_create_negative_base_rate(self, client: TestClient, auth_headers, sample_hotel):
        response = client.post(f"/api/hotels/{sample_hotel.id}/room-types", headers=auth_headers,
                               json={"name": "Suite", "base_rate": -1})
        assert response.status_code == 400
        assert response.json()["error"].startswith("base_rate: ")

    def test_create_for_missing_hotel(self, client: TestClient, auth_headers):
        response = client.post("/api/hotels/9999/room-types", headers=auth_headers,
                               json={"name": "Suite", "base_rate": 100})
        assert response.status_code == 404
        assert response.json() == {"error": "Hotel not found"}

    def test_create_string_base_rate_rejected(self, client: TestClient, auth_headers, sample_hotel):
        response = client.post(f"/api/hotels/{sample_hotel.id}/room-types", headers=auth_headers,
                               json={"name": "Suite", "base_rate": "100"})
        assert response.status_code == 400
        assert response.json()["error"].startswith("base_rate: ")

    def test_create_rounds_base_rate_to_cents(self, client: TestClient, auth_headers, sample_hotel):
        response = client.post(f"/api/hotels/{sample_hotel.id}/room-types", headers=auth_headers,
                               json={"name": "Suite", "base_rate": 199.995})
        assert response.status_code == 201
        assert response.json()["base_rate"] == 200.0

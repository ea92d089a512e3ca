from enums.bike_status import BikeStatus
from enums.bike_type import BikeType

from conftest import auth_headers


def bike_payload(**overrides):
    payload = {
        "brand": "Yamaha",
        "model": "R1",
        "year": 2023,
        "type": "SPORT",
        "city": "Delhi",
        "price_per_hour": 600,
        "price_per_day": 3600,
        "price_per_month": 72000,
        "description": "Racing-inspired sport bike",
    }
    payload.update(overrides)
    return payload


def test_owner_creates_bike_under_own_account(client, owner, business):
    response = client.post(
        "/api/bikes",
        json=bike_payload(owner_id=business.id),
        headers=auth_headers(owner),
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["owner_id"] == owner.id
    assert data["owner_name"] == owner.name
    assert data["status"] == "AVAILABLE"
    assert data["price_per_hour"] == 600.0


def test_admin_assigns_owner_and_unknown_owner_fails(client, admin, business):
    assigned = client.post(
        "/api/bikes", json=bike_payload(owner_id=business.id), headers=auth_headers(admin)
    )
    unknown = client.post(
        "/api/bikes", json=bike_payload(owner_id=999), headers=auth_headers(admin)
    )

    assert assigned.json()["data"]["owner_id"] == business.id
    assert unknown.status_code == 400


def test_customer_cannot_create_bike(client, customer):
    response = client.post("/api/bikes", json=bike_payload(), headers=auth_headers(customer))

    assert response.status_code == 403


def test_create_bike_requires_token(client):
    response = client.post("/api/bikes", json=bike_payload())

    assert response.status_code == 401


def test_create_bike_rejects_non_positive_price(client, owner):
    response = client.post(
        "/api/bikes", json=bike_payload(price_per_hour=0), headers=auth_headers(owner)
    )

    assert response.status_code == 400
    assert "price_per_hour" in response.json()["message"]


def test_browsing_is_public_and_lists_active_bikes(client, make_bike):
    make_bike(city="Mumbai")
    make_bike(city="Delhi", is_active=False)

    response = client.get("/api/bikes")

    assert response.status_code == 200
    assert [bike["city"] for bike in response.json()["data"]] == ["Mumbai"]


def test_get_bike_by_id(client, make_bike):
    bike = make_bike()

    assert client.get(f"/api/bikes/{bike.id}").json()["data"]["brand"] == "Honda"
    assert client.get("/api/bikes/999").status_code == 404


def test_filter_by_city_returns_exactly_active_bikes_in_city(client, make_bike):
    first = make_bike(city="Mumbai")
    make_bike(city="Mumbai", is_active=False)
    make_bike(city="Chennai")
    booked = make_bike(city="Mumbai", status=BikeStatus.BOOKED)

    response = client.get("/api/bikes/filter", params={"city": "Mumbai"})

    assert [bike["id"] for bike in response.json()["data"]] == [first.id, booked.id]


def test_filter_combines_criteria(client, make_bike):
    make_bike(city="Mumbai", brand="Honda", type=BikeType.SPORT)
    cruiser = make_bike(city="Mumbai", brand="Honda", type=BikeType.CRUISER)
    make_bike(city="Mumbai", brand="BMW", type=BikeType.CRUISER)

    response = client.get(
        "/api/bikes/filter", params={"city": "Mumbai", "brand": "Honda", "type": "CRUISER"}
    )

    assert [bike["id"] for bike in response.json()["data"]] == [cruiser.id]


def test_list_by_status_type_city_brand_owner(client, owner, make_bike):
    mine = make_bike(owner=owner, brand="Ducati", city="Delhi", type=BikeType.TOURING)
    other = make_bike(brand="BMW", city="Chennai", status=BikeStatus.MAINTENANCE)

    def ids(path):
        return [bike["id"] for bike in client.get(path).json()["data"]]

    assert ids("/api/bikes/status/MAINTENANCE") == [other.id]
    assert ids("/api/bikes/type/TOURING") == [mine.id]
    assert ids("/api/bikes/city/Chennai") == [other.id]
    assert ids("/api/bikes/brand/Ducati") == [mine.id]
    assert ids(f"/api/bikes/owner/{owner.id}") == [mine.id]


def test_popular_returns_first_three_available(client, make_bike):
    bikes = [make_bike() for _ in range(5)]
    make_bike(status=BikeStatus.BOOKED)

    response = client.get("/api/bikes/popular")

    assert [bike["id"] for bike in response.json()["data"]] == [b.id for b in bikes[:3]]


def test_availability_reports_status(client, make_bike):
    free = make_bike()
    busy = make_bike(status=BikeStatus.BOOKED)
    window = {"startDate": "2024-06-01T09:00:00", "endDate": "2024-06-01T18:00:00"}

    available = client.get(f"/api/bikes/{free.id}/availability", params=window).json()["data"]
    unavailable = client.get(f"/api/bikes/{busy.id}/availability", params=window).json()["data"]

    assert available["available"] is True
    assert available["bike"]["id"] == free.id
    assert unavailable == {"available": False, "reason": "Bike is currently booked", "bike": None}


def test_availability_requires_window(client, make_bike):
    bike = make_bike()

    response = client.get(f"/api/bikes/{bike.id}/availability")

    assert response.status_code == 400


def test_update_bike_fields_and_status(client, owner, make_bike):
    bike = make_bike(owner=owner)

    response = client.put(
        f"/api/bikes/{bike.id}",
        json={"price_per_hour": 450, "status": "MAINTENANCE"},
        headers=auth_headers(owner),
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["price_per_hour"] == 450.0
    assert data["status"] == "MAINTENANCE"
    assert data["brand"] == "Honda"


def test_update_cannot_mark_bike_booked(client, owner, make_bike):
    bike = make_bike(owner=owner)

    response = client.put(
        f"/api/bikes/{bike.id}", json={"status": "BOOKED"}, headers=auth_headers(owner)
    )

    assert response.status_code == 400


def test_update_missing_bike_is_not_found(client, owner):
    response = client.put("/api/bikes/999", json={"city": "Pune"}, headers=auth_headers(owner))

    assert response.status_code == 404


def test_delete_bike_is_admin_only(client, admin, owner, make_bike):
    bike = make_bike(owner=owner)

    denied = client.delete(f"/api/bikes/{bike.id}", headers=auth_headers(owner))
    deleted = client.delete(f"/api/bikes/{bike.id}", headers=auth_headers(admin))

    assert denied.status_code == 403
    assert deleted.status_code == 200
    assert client.get(f"/api/bikes/{bike.id}").status_code == 404

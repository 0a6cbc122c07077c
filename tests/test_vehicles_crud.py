import uuid

from conftest import vehicle_payload
from moovsafe.services import vehicles as vehicle_service
from moovsafe.services.vehicle_images import VEHICLE_IMAGES


def test_vehicles_full_crud_flow(client):
    create_resp = client.post("/api/vehicles", json=vehicle_payload())
    assert create_resp.status_code == 201
    vehicle = create_resp.json()
    vehicle_id = vehicle["id"]
    assert vehicle["licensePlate"] == "ABC123GP"
    assert vehicle["engineNumber"] == "ENG-2ZR-0001"
    assert vehicle["status"] == "active"
    assert vehicle["imageUrl"] == VEHICLE_IMAGES["sedan"]

    list_resp = client.get("/api/vehicles")
    assert list_resp.status_code == 200
    assert [item["id"] for item in list_resp.json()] == [vehicle_id]

    get_resp = client.get(f"/api/vehicles/{vehicle_id}")
    assert get_resp.status_code == 200
    assert get_resp.json()["vin"] == "JTDBR32E720012345"

    by_plate = client.get("/api/vehicles/license/ABC123GP")
    assert by_plate.status_code == 200
    assert by_plate.json()["id"] == vehicle_id

    update_resp = client.put(f"/api/vehicles/{vehicle_id}", json={"currentMileage": 50250, "status": "maintenance"})
    assert update_resp.status_code == 200
    updated = update_resp.json()
    assert updated["currentMileage"] == 50250
    assert updated["status"] == "maintenance"
    assert updated["make"] == "Toyota"

    delete_resp = client.delete(f"/api/vehicles/{vehicle_id}")
    assert delete_resp.status_code == 200
    body = delete_resp.json()
    assert body["message"] == "Vehicle deleted successfully"
    assert body["vehicle"]["id"] == vehicle_id
    assert body["vehicle"]["licensePlate"] == "ABC123GP"

    missing_resp = client.get(f"/api/vehicles/{vehicle_id}")
    assert missing_resp.status_code == 404
    assert missing_resp.json() == {"error": "Vehicle not found"}

    second_delete = client.delete(f"/api/vehicles/{vehicle_id}")
    assert second_delete.status_code == 404


def test_unknown_vehicle_returns_404(client):
    resp = client.get(f"/api/vehicles/{uuid.uuid4()}")
    assert resp.status_code == 404
    assert resp.json()["error"] == "Vehicle not found"

    resp = client.get("/api/vehicles/license/NOPE000")
    assert resp.status_code == 404

    resp = client.put(f"/api/vehicles/{uuid.uuid4()}", json={"colour": "Blue"})
    assert resp.status_code == 404


def test_create_vehicle_accepts_form_data(client):
    form = {k: str(v) for k, v in vehicle_payload().items()}
    resp = client.post("/api/vehicles", data=form)
    assert resp.status_code == 201, resp.text
    vehicle = resp.json()
    assert vehicle["year"] == 2021
    assert vehicle["currentMileage"] == 45000


def test_create_vehicle_accepts_snake_case_names(client):
    payload = vehicle_payload()
    payload["license_plate"] = payload.pop("licensePlate")
    payload["vehicle_type"] = payload.pop("vehicleType")
    resp = client.post("/api/vehicles", json=payload)
    assert resp.status_code == 201
    assert resp.json()["licensePlate"] == "ABC123GP"


def test_stock_image_follows_vehicle_type(make_vehicle):
    pickup = make_vehicle(vehicleType="Pickup Truck")
    assert pickup["imageUrl"] == VEHICLE_IMAGES["pickuptruck"]

    odd = make_vehicle(
        vehicleType="Hovercraft",
        vin="VIN-HOVER-1",
        engineNumber="ENG-HOVER-1",
        licensePlate="HOV001GP",
    )
    assert odd["imageUrl"] == VEHICLE_IMAGES["default"]


def test_changing_type_reassigns_stock_image(client, make_vehicle):
    vehicle = make_vehicle()
    resp = client.put(f"/api/vehicles/{vehicle['id']}", json={"vehicleType": "suv"})
    assert resp.status_code == 200
    assert resp.json()["imageUrl"] == VEHICLE_IMAGES["suv"]

    custom = "https://images.test/custom.png"
    resp = client.put(f"/api/vehicles/{vehicle['id']}", json={"vehicleType": "coupe", "imageUrl": custom})
    assert resp.json()["imageUrl"] == custom


def test_empty_update_is_rejected(client, make_vehicle):
    vehicle = make_vehicle()
    resp = client.put(f"/api/vehicles/{vehicle['id']}", json={})
    assert resp.status_code == 400
    assert resp.json()["error"] == "At least one field must be provided to update"


def test_duplicate_identifiers_are_reported_in_order(client, make_vehicle):
    make_vehicle()
    resp = client.post("/api/vehicles", json=vehicle_payload())
    assert resp.status_code == 409
    body = resp.json()
    assert body["error"] == "Vehicle already exists"
    assert [d["field"] for d in body["details"]] == ["licensePlate", "vin", "engineNumber"]
    assert [d["message"] for d in body["details"]] == [
        "License plate already exists",
        "VIN already exists",
        "Engine number already exists",
    ]

    assert len(client.get("/api/vehicles").json()) == 1


def test_each_identifier_conflicts_on_its_own(client, make_vehicle):
    make_vehicle()
    cases = [
        ({"vin": "OTHER-VIN", "engineNumber": "OTHER-ENG"}, "licensePlate"),
        ({"licensePlate": "OTHER1GP", "engineNumber": "OTHER-ENG"}, "vin"),
        ({"licensePlate": "OTHER1GP", "vin": "OTHER-VIN"}, "engineNumber"),
    ]
    for overrides, field in cases:
        resp = client.post("/api/vehicles", json=vehicle_payload(**overrides))
        assert resp.status_code == 409
        assert [d["field"] for d in resp.json()["details"]] == [field]


def test_update_conflicts_with_other_vehicle_only(client, make_vehicle):
    first = make_vehicle()
    second = make_vehicle(vin="VIN-2", engineNumber="ENG-2", licensePlate="XYZ789GP")

    resp = client.put(f"/api/vehicles/{second['id']}", json={"licensePlate": first["licensePlate"]})
    assert resp.status_code == 409
    assert resp.json()["details"] == [
        {"field": "licensePlate", "message": "License plate already exists"}
    ]

    # Re-sending its own identifiers is not a conflict
    resp = client.put(f"/api/vehicles/{second['id']}", json={"licensePlate": "XYZ789GP", "vin": "VIN-2"})
    assert resp.status_code == 200


def test_concurrent_duplicate_becomes_conflict(client, make_vehicle, monkeypatch):
    make_vehicle()
    real_find_conflicts = vehicle_service.find_conflicts
    calls = []

    # The first lookup misses the existing row, as if another request committed after it
    def racing_find_conflicts(db, values, exclude_id=None):
        calls.append(values)
        if len(calls) == 1:
            return []
        return real_find_conflicts(db, values, exclude_id)

    monkeypatch.setattr(vehicle_service, "find_conflicts", racing_find_conflicts)

    resp = client.post("/api/vehicles", json=vehicle_payload())
    assert resp.status_code == 409
    assert [d["field"] for d in resp.json()["details"]] == ["licensePlate", "vin", "engineNumber"]
    assert len(calls) == 2
    assert len(client.get("/api/vehicles").json()) == 1

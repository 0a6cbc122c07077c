from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Mapping, Optional
from uuid import UUID

from moovsafe.core.database import get_db
from moovsafe.core.validation import validate_body
from moovsafe.models.vehicle import Vehicle
from moovsafe.schemas.vehicle import VehicleCreate, VehicleUpdate, VehicleResponse
from moovsafe.services import vehicles as vehicle_service
from moovsafe.services.vehicle_images import get_vehicle_images

router = APIRouter()


@router.get("", response_model=List[VehicleResponse])
def get_vehicles(
    skip: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=0),
    db: Session = Depends(get_db),
):
    """List all vehicles, newest first."""
    query = db.query(Vehicle).order_by(Vehicle.created_at.desc()).offset(skip)
    if limit is not None:
        query = query.limit(limit)
    return query.all()


@router.get("/license/{license_plate}", response_model=VehicleResponse)
def get_vehicle_by_license(license_plate: str, db: Session = Depends(get_db)):
    """Look a vehicle up by its license plate."""
    return vehicle_service.get_vehicle_by_license_or_404(db, license_plate)


@router.get("/{vehicle_id}", response_model=VehicleResponse)
def get_vehicle(vehicle_id: UUID, db: Session = Depends(get_db)):
    return vehicle_service.get_vehicle_or_404(db, vehicle_id)


@router.post("", response_model=VehicleResponse, status_code=201)
def create_vehicle(
    vehicle: VehicleCreate = Depends(validate_body(VehicleCreate)),
    images: Mapping[str, str] = Depends(get_vehicle_images),
    db: Session = Depends(get_db),
):
    """Register a vehicle.

    Rejected with 409 when the license plate, VIN or engine number is
    already in use. The vehicle gets a stock image for its type.
    """
    return vehicle_service.create_vehicle(db, vehicle, images)


@router.put("/{vehicle_id}", response_model=VehicleResponse)
def update_vehicle(
    vehicle_id: UUID,
    vehicle: VehicleUpdate = Depends(validate_body(VehicleUpdate)),
    images: Mapping[str, str] = Depends(get_vehicle_images),
    db: Session = Depends(get_db),
):
    """Partially update a vehicle (e.g., current mileage or status)."""
    return vehicle_service.update_vehicle(db, vehicle_id, vehicle, images)


@router.delete("/{vehicle_id}")
def delete_vehicle(vehicle_id: UUID, db: Session = Depends(get_db)):
    db_vehicle = vehicle_service.get_vehicle_or_404(db, vehicle_id)
    deleted = VehicleResponse.model_validate(db_vehicle).model_dump(mode="json", by_alias=True)

    db.delete(db_vehicle)
    db.commit()
    return {"message": "Vehicle deleted successfully", "vehicle": deleted}

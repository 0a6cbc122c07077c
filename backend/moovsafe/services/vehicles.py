"""Vehicle creation and update with identifier conflict detection.

License plate, VIN and engine number are unique across the fleet. Writes
first look for vehicles already holding any of the supplied identifiers so
the 409 can name the colliding fields. The unique constraints back this up:
if a concurrent request slips in between the lookup and the commit, the
resulting IntegrityError is turned into the same 409.
"""
import logging
from typing import Dict, List, Mapping, Optional
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from moovsafe.core.errors import BadRequestError, ConflictError, NotFoundError
from moovsafe.models.vehicle import Vehicle
from moovsafe.schemas.vehicle import VehicleCreate, VehicleUpdate
from moovsafe.services.vehicle_images import image_for_vehicle_type

logger = logging.getLogger(__name__)

# (column, wire name, label), in the order conflicts are reported
IDENTITY_FIELDS = (
    ("license_plate", "licensePlate", "License plate"),
    ("vin", "vin", "VIN"),
    ("engine_number", "engineNumber", "Engine number"),
)


def get_vehicle_or_404(db: Session, vehicle_id: UUID) -> Vehicle:
    vehicle = db.query(Vehicle).filter(Vehicle.id == vehicle_id).first()
    if not vehicle:
        raise NotFoundError("Vehicle not found")
    return vehicle


def get_vehicle_by_license_or_404(db: Session, license_plate: str) -> Vehicle:
    vehicle = db.query(Vehicle).filter(Vehicle.license_plate == license_plate).first()
    if not vehicle:
        raise NotFoundError("Vehicle not found")
    return vehicle


def find_conflicts(db: Session, values: Mapping, exclude_id: Optional[UUID] = None) -> List[Dict[str, str]]:
    """Return one detail per identifier already used by another vehicle."""
    supplied = [(column, field, label, values[column])
                for column, field, label in IDENTITY_FIELDS
                if values.get(column) is not None]
    if not supplied:
        return []

    query = db.query(Vehicle).filter(
        or_(*(getattr(Vehicle, column) == value for column, _, _, value in supplied))
    )
    if exclude_id is not None:
        query = query.filter(Vehicle.id != exclude_id)
    existing = query.all()

    return [
        {"field": field, "message": f"{label} already exists"}
        for column, field, label, value in supplied
        if any(getattr(vehicle, column) == value for vehicle in existing)
    ]


def conflict_error(details: List[Dict[str, str]]) -> ConflictError:
    return ConflictError("Vehicle already exists", details=details)


def commit_vehicle(db: Session, values: Mapping, exclude_id: Optional[UUID] = None) -> None:
    """Commit, translating a unique-constraint violation into a 409."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        details = find_conflicts(db, values, exclude_id)
        if not details:
            raise
        logger.info(f"Vehicle write lost a uniqueness race: {details}")
        raise conflict_error(details) from e


def create_vehicle(db: Session, data: VehicleCreate, images: Mapping[str, str]) -> Vehicle:
    values = data.model_dump()

    details = find_conflicts(db, values)
    if details:
        logger.info(f"Rejected duplicate vehicle {values['license_plate']}: {details}")
        raise conflict_error(details)

    vehicle = Vehicle(**values, image_url=image_for_vehicle_type(values["vehicle_type"], images))
    db.add(vehicle)
    commit_vehicle(db, values)
    db.refresh(vehicle)
    logger.info(f"Created vehicle {vehicle.id} ({vehicle.license_plate})")
    return vehicle


def update_vehicle(db: Session, vehicle_id: UUID, data: VehicleUpdate, images: Mapping[str, str]) -> Vehicle:
    update_data = data.model_dump(exclude_unset=True, exclude_none=True)
    if not update_data:
        raise BadRequestError("At least one field must be provided to update")

    vehicle = get_vehicle_or_404(db, vehicle_id)

    details = find_conflicts(db, update_data, exclude_id=vehicle.id)
    if details:
        raise conflict_error(details)

    # A new type gets the matching stock image unless one was supplied
    if "vehicle_type" in update_data and "image_url" not in update_data:
        update_data["image_url"] = image_for_vehicle_type(update_data["vehicle_type"], images)

    for key, value in update_data.items():
        setattr(vehicle, key, value)

    commit_vehicle(db, update_data, exclude_id=vehicle.id)
    db.refresh(vehicle)
    return vehicle

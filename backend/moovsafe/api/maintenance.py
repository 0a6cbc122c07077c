from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from moovsafe.core.database import get_db
from moovsafe.core.errors import BadRequestError, NotFoundError
from moovsafe.core.validation import validate_body
from moovsafe.models.types import utcnow
from moovsafe.models.maintenance import MaintenanceRecord
from moovsafe.schemas.maintenance import MaintenanceCreate, MaintenanceUpdate, MaintenanceResponse
from moovsafe.services.media import (
    ImageStore,
    StoredImage,
    collect_files,
    discard_images,
    get_image_store,
    upload_folder,
    upload_many,
    upload_one,
)
from moovsafe.services.vehicles import get_vehicle_by_license_or_404, get_vehicle_or_404

router = APIRouter()

UPLOAD_LIMITS = {"odometerImage": 1, "invoices": 5, "photos": 5}


def get_record_or_404(db: Session, record_id: UUID) -> MaintenanceRecord:
    record = db.query(MaintenanceRecord).filter(MaintenanceRecord.id == record_id).first()
    if not record:
        raise NotFoundError("Maintenance record not found")
    return record


@router.get("", response_model=List[MaintenanceResponse])
def get_maintenance_records(
    skip: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=0),
    maintenance_type: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """Get all maintenance records."""
    query = db.query(MaintenanceRecord)
    if maintenance_type:
        query = query.filter(MaintenanceRecord.maintenance_type == maintenance_type)
    query = query.order_by(MaintenanceRecord.date.desc()).offset(skip)
    if limit is not None:
        query = query.limit(limit)
    return query.all()


@router.get("/vehicle/{license_plate}", response_model=List[MaintenanceResponse])
def get_maintenance_for_vehicle(license_plate: str, db: Session = Depends(get_db)):
    """Get the service history of one vehicle, newest first."""
    vehicle = get_vehicle_by_license_or_404(db, license_plate)
    return (
        db.query(MaintenanceRecord)
        .filter(MaintenanceRecord.vehicle_id == vehicle.id)
        .order_by(MaintenanceRecord.date.desc())
        .all()
    )


@router.get("/{record_id}", response_model=MaintenanceResponse)
def get_maintenance_record(record_id: UUID, db: Session = Depends(get_db)):
    """Get a specific maintenance record."""
    return get_record_or_404(db, record_id)


@router.post("", response_model=MaintenanceResponse, status_code=201)
async def create_maintenance_record(
    request: Request,
    record: MaintenanceCreate = Depends(validate_body(MaintenanceCreate)),
    store: ImageStore = Depends(get_image_store),
    db: Session = Depends(get_db),
):
    """Create a new maintenance record.

    Multipart requests may carry one ``odometerImage`` and up to 5 each of
    ``invoices`` and ``photos``. Files already uploaded are removed again
    if the request fails.
    """
    get_vehicle_or_404(db, record.vehicle_id)
    files = await collect_files(request, UPLOAD_LIMITS)

    uploaded: List[StoredImage] = []
    try:
        odometer = await upload_one(store, files["odometerImage"], upload_folder("maintenance", "odometer"))
        if odometer:
            uploaded.append(odometer)
        invoices = await upload_many(store, files["invoices"], upload_folder("maintenance", "invoices"))
        uploaded.extend(invoices)
        photos = await upload_many(store, files["photos"], upload_folder("maintenance", "photos"))
        uploaded.extend(photos)

        data = record.model_dump(exclude_none=True)
        data["date"] = data.get("date") or utcnow()
        db_record = MaintenanceRecord(
            **data,
            odometer_image_url=odometer.url if odometer else None,
            odometer_image_public_id=odometer.public_id if odometer else None,
            invoices_url=[f.url for f in invoices],
            invoices_public_ids=[f.public_id for f in invoices],
            photos_url=[f.url for f in photos],
            photos_public_ids=[f.public_id for f in photos],
        )
        db.add(db_record)
        db.commit()
    except Exception:
        await discard_images(store, [f.public_id for f in uploaded])
        raise

    db.refresh(db_record)
    return db_record


@router.put("/{record_id}", response_model=MaintenanceResponse)
def update_maintenance_record(
    record_id: UUID,
    record: MaintenanceUpdate = Depends(validate_body(MaintenanceUpdate)),
    db: Session = Depends(get_db)
):
    """Update a maintenance record."""
    update_data = record.model_dump(exclude_unset=True, exclude_none=True)
    if not update_data:
        raise BadRequestError("At least one field must be provided to update")

    db_record = get_record_or_404(db, record_id)
    if "vehicle_id" in update_data and update_data["vehicle_id"] != db_record.vehicle_id:
        get_vehicle_or_404(db, update_data["vehicle_id"])

    for key, value in update_data.items():
        setattr(db_record, key, value)

    db.commit()
    db.refresh(db_record)
    return db_record


@router.delete("/{record_id}")
async def delete_maintenance_record(
    record_id: UUID,
    store: ImageStore = Depends(get_image_store),
    db: Session = Depends(get_db),
):
    """Delete a maintenance record and its uploaded files."""
    db_record = get_record_or_404(db, record_id)
    deleted = MaintenanceResponse.model_validate(db_record).model_dump(mode="json", by_alias=True)
    public_ids = [
        db_record.odometer_image_public_id,
        *(db_record.invoices_public_ids or []),
        *(db_record.photos_public_ids or []),
    ]

    db.delete(db_record)
    db.commit()

    await discard_images(store, public_ids)
    return {"message": "Maintenance record deleted successfully", "record": deleted}

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime, time, timezone
from uuid import UUID
import logging

from moovsafe.core.database import get_db
from moovsafe.core.errors import BadRequestError, NotFoundError
from moovsafe.core.validation import validate_body
from moovsafe.models.inspection import Inspection
from moovsafe.models.types import utcnow
from moovsafe.schemas.inspection import InspectionCreate, InspectionResponse
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
from moovsafe.services.vehicles import get_vehicle_or_404

logger = logging.getLogger(__name__)

router = APIRouter()

# Multipart file fields and how many files each accepts
UPLOAD_LIMITS = {"faultsImages": 5, "odometerImage": 1}


def get_inspection_or_404(db: Session, inspection_id: UUID) -> Inspection:
    inspection = db.query(Inspection).filter(Inspection.id == inspection_id).first()
    if not inspection:
        raise NotFoundError("Inspection not found")
    return inspection


@router.get("", response_model=List[InspectionResponse])
def get_inspections(
    skip: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=0),
    db: Session = Depends(get_db),
):
    """List all inspections, most recent first."""
    query = db.query(Inspection).order_by(Inspection.date.desc()).offset(skip)
    if limit is not None:
        query = query.limit(limit)
    return query.all()


@router.get("/date", response_model=List[InspectionResponse])
def get_inspections_by_date(
    date: Optional[str] = Query(None, description="Day to fetch, YYYY-MM-DD"),
    db: Session = Depends(get_db),
):
    """Inspections recorded on a given UTC day, 00:00:00 to 23:59:59 inclusive."""
    try:
        day = datetime.strptime(date or "", "%Y-%m-%d").date()
    except ValueError:
        raise BadRequestError("Invalid or missing date parameter")

    start = datetime.combine(day, time(0, 0, 0), tzinfo=timezone.utc)
    end = datetime.combine(day, time(23, 59, 59), tzinfo=timezone.utc)

    inspections = (
        db.query(Inspection)
        .filter(Inspection.date >= start, Inspection.date <= end)
        .order_by(Inspection.date.asc())
        .all()
    )
    if not inspections:
        raise NotFoundError("No inspections found for the given date")
    return inspections


@router.get("/{inspection_id}", response_model=InspectionResponse)
def get_inspection(inspection_id: UUID, db: Session = Depends(get_db)):
    return get_inspection_or_404(db, inspection_id)


@router.post("", response_model=InspectionResponse, status_code=201)
async def create_inspection(
    request: Request,
    inspection: InspectionCreate = Depends(validate_body(InspectionCreate)),
    store: ImageStore = Depends(get_image_store),
    db: Session = Depends(get_db),
):
    """Record an inspection.

    Accepts JSON, or multipart form data with up to 5 ``faultsImages`` and
    one ``odometerImage``. Images are uploaded before the row is written
    and removed again if the request fails afterwards.
    """
    vehicle = get_vehicle_or_404(db, inspection.vehicle_id)
    files = await collect_files(request, UPLOAD_LIMITS)

    uploaded: List[StoredImage] = []
    try:
        faults = await upload_many(store, files["faultsImages"], upload_folder("inspections", "faults"))
        uploaded.extend(faults)
        odometer = await upload_one(store, files["odometerImage"], upload_folder("inspections", "odometer"))
        if odometer:
            uploaded.append(odometer)

        data = inspection.model_dump(exclude_none=True)
        data["date"] = data.get("date") or utcnow()
        db_inspection = Inspection(
            **data,
            faults_images_url=[image.url for image in faults],
            faults_images_public_ids=[image.public_id for image in faults],
            odometer_image_url=odometer.url if odometer else None,
            odometer_image_public_id=odometer.public_id if odometer else None,
        )
        db.add(db_inspection)

        # Keep the vehicle's last inspection date current
        if vehicle.last_inspection_date is None or _as_aware(vehicle.last_inspection_date) < data["date"]:
            vehicle.last_inspection_date = data["date"]

        db.commit()
    except Exception:
        await discard_images(store, [image.public_id for image in uploaded])
        raise

    db.refresh(db_inspection)
    logger.info(f"Created inspection {db_inspection.id} for vehicle {vehicle.id}")
    return db_inspection


@router.delete("/{inspection_id}")
async def delete_inspection(
    inspection_id: UUID,
    store: ImageStore = Depends(get_image_store),
    db: Session = Depends(get_db),
):
    """Delete an inspection and its uploaded images."""
    db_inspection = get_inspection_or_404(db, inspection_id)
    deleted = InspectionResponse.model_validate(db_inspection).model_dump(mode="json", by_alias=True)
    public_ids = [*(db_inspection.faults_images_public_ids or []), db_inspection.odometer_image_public_id]

    db.delete(db_inspection)
    db.commit()

    await discard_images(store, public_ids)
    return {"message": "Inspection deleted successfully", "inspection": deleted}


def _as_aware(value: datetime) -> datetime:
    # SQLite hands back naive UTC values
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)

import uuid

from sqlalchemy import Column, Integer, String, Float, DateTime, Text, Uuid
from moovsafe.core.database import Base
from moovsafe.models.types import StringList, utcnow


class MaintenanceRecord(Base):
    __tablename__ = "maintenance_history"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    vehicle_id = Column(Uuid, index=True, nullable=False)  # vehicles.id, checked on create/update

    # Maintenance details
    date = Column(DateTime(timezone=True), default=utcnow)
    mileage = Column(Integer, nullable=False)
    maintenance_type = Column(String(100), nullable=False)  # Oil Change, Brake Replacement, ...
    description = Column(Text)

    # Who did the work
    performed_by = Column(String(50), nullable=False)  # DIY | Workshop
    service_center = Column(String(255))
    cost = Column(Float)

    # Parts used (DIY)
    parts = Column(StringList)

    # Uploaded files, with the image host ids kept alongside for deletion
    odometer_image_url = Column(String(255))
    odometer_image_public_id = Column(String(255))
    invoices_url = Column(StringList)
    invoices_public_ids = Column(StringList)
    photos_url = Column(StringList)
    photos_public_ids = Column(StringList)

    # Next service
    next_service_date = Column(DateTime(timezone=True))
    next_service_mileage = Column(Integer)

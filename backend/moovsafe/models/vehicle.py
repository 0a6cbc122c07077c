import uuid

from sqlalchemy import Column, Integer, String, DateTime, Uuid
from sqlalchemy.sql import func
from moovsafe.core.database import Base


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    make = Column(String(255), nullable=False)
    model = Column(String(255), nullable=False)
    year = Column(Integer, nullable=False)

    # Identifiers, each unique across the fleet
    vin = Column(String(50), unique=True, index=True, nullable=False)
    engine_number = Column(String(50), unique=True, nullable=False)
    license_plate = Column(String(20), unique=True, index=True, nullable=False)

    fuel_type = Column(String(100), nullable=False)
    transmission = Column(String(50), nullable=False)
    current_mileage = Column(Integer, nullable=False)
    colour = Column(String(50), nullable=False)
    image_url = Column(String(500))
    vehicle_type = Column(String(50), nullable=False)
    status = Column(String(20), nullable=False, default="active")  # free-form, e.g. active, inactive, maintenance

    last_inspection_date = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

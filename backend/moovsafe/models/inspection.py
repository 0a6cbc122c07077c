import uuid

from sqlalchemy import Column, Integer, String, Text, DateTime, Uuid
from moovsafe.core.database import Base
from moovsafe.models.types import StringList, utcnow


class Inspection(Base):
    __tablename__ = "inspections"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    vehicle_id = Column(Uuid, index=True, nullable=False)  # vehicles.id, checked on create
    date = Column(DateTime(timezone=True), index=True, nullable=False, default=utcnow)
    mileage = Column(Integer, nullable=False)

    overall_condition = Column(String(100), nullable=False)  # Good | Fair | Poor

    # Exterior
    exterior_windshield = Column(String(50))
    exterior_mirrors = Column(String(50))
    exterior_lights = Column(String(50))
    exterior_tires = Column(String(50))

    # Engine & fluids: Good | Low | Change Needed
    engine_oil = Column(String(50))
    engine_coolant = Column(String(50))
    engine_brake_fluid = Column(String(50))
    engine_transmission_fluid = Column(String(50))
    engine_power_steering = Column(String(50))
    engine_battery = Column(String(50))

    # Interior
    interior_seats = Column(String(50))
    interior_seatbelts = Column(String(50))
    interior_horn = Column(String(50))  # Functional | Non-Functional
    interior_ac = Column(String(50))
    windows = Column(String(50))

    # Mechanical / safety
    brakes = Column(String(50))
    exhaust = Column(String(50))
    lights_indicators = Column(String(50))

    # Equipment: Present | Absent
    spare_tire = Column(String(50))
    jack = Column(String(50))
    wheel_spanner = Column(String(50))
    wheel_lock_nut_tool = Column(String(50))
    fire_extinguisher = Column(String(50))

    notes = Column(Text)

    # Photos, with the image host ids kept alongside for deletion
    faults_images_url = Column(StringList)
    faults_images_public_ids = Column(StringList)
    odometer_image_url = Column(String(255))
    odometer_image_public_id = Column(String(255))

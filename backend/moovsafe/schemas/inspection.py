from pydantic import ConfigDict, Field, field_validator
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from moovsafe.schemas.base import CamelModel, as_utc

# Per-subsystem condition fields, in checklist order
CHECKLIST_FIELDS = (
    "exterior_windshield",
    "exterior_mirrors",
    "exterior_lights",
    "exterior_tires",
    "engine_oil",
    "engine_coolant",
    "engine_brake_fluid",
    "engine_transmission_fluid",
    "engine_power_steering",
    "engine_battery",
    "interior_seats",
    "interior_seatbelts",
    "interior_horn",
    "interior_ac",
    "windows",
    "brakes",
    "exhaust",
    "lights_indicators",
    "spare_tire",
    "jack",
    "wheel_spanner",
    "wheel_lock_nut_tool",
    "fire_extinguisher",
)


class InspectionBase(CamelModel):
    vehicle_id: UUID
    mileage: int = Field(ge=0)
    overall_condition: str = Field(min_length=1, max_length=100)

    exterior_windshield: Optional[str] = Field(None, max_length=50)
    exterior_mirrors: Optional[str] = Field(None, max_length=50)
    exterior_lights: Optional[str] = Field(None, max_length=50)
    exterior_tires: Optional[str] = Field(None, max_length=50)

    engine_oil: Optional[str] = Field(None, max_length=50)
    engine_coolant: Optional[str] = Field(None, max_length=50)
    engine_brake_fluid: Optional[str] = Field(None, max_length=50)
    engine_transmission_fluid: Optional[str] = Field(None, max_length=50)
    engine_power_steering: Optional[str] = Field(None, max_length=50)
    engine_battery: Optional[str] = Field(None, max_length=50)

    interior_seats: Optional[str] = Field(None, max_length=50)
    interior_seatbelts: Optional[str] = Field(None, max_length=50)
    interior_horn: Optional[str] = Field(None, max_length=50)
    interior_ac: Optional[str] = Field(None, max_length=50, alias="interiorAC")
    windows: Optional[str] = Field(None, max_length=50)

    brakes: Optional[str] = Field(None, max_length=50)
    exhaust: Optional[str] = Field(None, max_length=50)
    lights_indicators: Optional[str] = Field(None, max_length=50)

    spare_tire: Optional[str] = Field(None, max_length=50)
    jack: Optional[str] = Field(None, max_length=50)
    wheel_spanner: Optional[str] = Field(None, max_length=50)
    wheel_lock_nut_tool: Optional[str] = Field(None, max_length=50)
    fire_extinguisher: Optional[str] = Field(None, max_length=50)

    notes: Optional[str] = None


class InspectionCreate(InspectionBase):
    date: Optional[datetime] = None

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v):
        return as_utc(v)


class InspectionResponse(InspectionBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    date: datetime
    faults_images_url: List[str] = Field(default_factory=list)
    odometer_image_url: Optional[str] = None

    @field_validator("faults_images_url", mode="before")
    @classmethod
    def empty_list_for_null(cls, v):
        return v or []

from pydantic import ConfigDict, Field
from datetime import datetime
from typing import Optional
from uuid import UUID

from moovsafe.schemas.base import CamelModel


class VehicleBase(CamelModel):
    make: str = Field(min_length=1, max_length=255)
    model: str = Field(min_length=1, max_length=255)
    year: int = Field(ge=1900, le=2100)
    vin: str = Field(min_length=1, max_length=50)
    engine_number: str = Field(min_length=1, max_length=50)
    license_plate: str = Field(min_length=1, max_length=20)
    fuel_type: str = Field(min_length=1, max_length=100)
    transmission: str = Field(min_length=1, max_length=50)
    current_mileage: int = Field(ge=0)
    colour: str = Field(min_length=1, max_length=50)
    vehicle_type: str = Field(min_length=1, max_length=50)


class VehicleCreate(VehicleBase):
    status: str = Field("active", min_length=1, max_length=20)


class VehicleUpdate(CamelModel):
    make: Optional[str] = Field(None, min_length=1, max_length=255)
    model: Optional[str] = Field(None, min_length=1, max_length=255)
    year: Optional[int] = Field(None, ge=1900, le=2100)
    vin: Optional[str] = Field(None, min_length=1, max_length=50)
    engine_number: Optional[str] = Field(None, min_length=1, max_length=50)
    license_plate: Optional[str] = Field(None, min_length=1, max_length=20)
    fuel_type: Optional[str] = Field(None, min_length=1, max_length=100)
    transmission: Optional[str] = Field(None, min_length=1, max_length=50)
    current_mileage: Optional[int] = Field(None, ge=0)
    colour: Optional[str] = Field(None, min_length=1, max_length=50)
    vehicle_type: Optional[str] = Field(None, min_length=1, max_length=50)
    image_url: Optional[str] = Field(None, max_length=500)
    status: Optional[str] = Field(None, min_length=1, max_length=20)


class VehicleResponse(VehicleBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    image_url: Optional[str] = None
    status: str
    last_inspection_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

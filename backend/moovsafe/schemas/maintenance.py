from pydantic import ConfigDict, Field, field_validator
from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from moovsafe.schemas.base import CamelModel, as_string_list, as_utc

PerformedBy = Literal["DIY", "Workshop"]


class MaintenanceCreate(CamelModel):
    vehicle_id: UUID
    date: Optional[datetime] = None
    mileage: int = Field(ge=0)
    maintenance_type: str = Field(min_length=1, max_length=100, alias="typeOfMaintenance")
    description: Optional[str] = None
    performed_by: PerformedBy
    service_center: Optional[str] = Field(None, max_length=255)
    cost: Optional[float] = Field(None, ge=0)
    parts: Optional[List[str]] = None
    next_service_date: Optional[datetime] = None
    next_service_mileage: Optional[int] = Field(None, ge=0)

    @field_validator("parts", mode="before")
    @classmethod
    def split_parts(cls, v):
        return as_string_list(v)

    @field_validator("date", "next_service_date")
    @classmethod
    def normalize_dates(cls, v):
        return as_utc(v)


class MaintenanceUpdate(CamelModel):
    vehicle_id: Optional[UUID] = None
    date: Optional[datetime] = None
    mileage: Optional[int] = Field(None, ge=0)
    maintenance_type: Optional[str] = Field(None, min_length=1, max_length=100, alias="typeOfMaintenance")
    description: Optional[str] = None
    performed_by: Optional[PerformedBy] = None
    service_center: Optional[str] = Field(None, max_length=255)
    cost: Optional[float] = Field(None, ge=0)
    parts: Optional[List[str]] = None
    next_service_date: Optional[datetime] = None
    next_service_mileage: Optional[int] = Field(None, ge=0)

    @field_validator("parts", mode="before")
    @classmethod
    def split_parts(cls, v):
        return as_string_list(v)

    @field_validator("date", "next_service_date")
    @classmethod
    def normalize_dates(cls, v):
        return as_utc(v)


class MaintenanceResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    vehicle_id: UUID
    date: Optional[datetime] = None
    mileage: int
    maintenance_type: str = Field(alias="typeOfMaintenance")
    description: Optional[str] = None
    performed_by: str
    service_center: Optional[str] = None
    cost: Optional[float] = None
    parts: List[str] = Field(default_factory=list)
    odometer_image_url: Optional[str] = None
    invoices_url: List[str] = Field(default_factory=list)
    photos_url: List[str] = Field(default_factory=list)
    next_service_date: Optional[datetime] = None
    next_service_mileage: Optional[int] = None

    @field_validator("parts", "invoices_url", "photos_url", mode="before")
    @classmethod
    def empty_list_for_null(cls, v):
        return v or []

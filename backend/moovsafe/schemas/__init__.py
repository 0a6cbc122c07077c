from moovsafe.schemas.vehicle import VehicleCreate, VehicleUpdate, VehicleResponse
from moovsafe.schemas.inspection import InspectionCreate, InspectionResponse
from moovsafe.schemas.maintenance import MaintenanceCreate, MaintenanceUpdate, MaintenanceResponse

__all__ = [
    "VehicleCreate", "VehicleUpdate", "VehicleResponse",
    "InspectionCreate", "InspectionResponse",
    "MaintenanceCreate", "MaintenanceUpdate", "MaintenanceResponse",
]

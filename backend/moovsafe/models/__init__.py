from moovsafe.models.vehicle import Vehicle
from moovsafe.models.inspection import Inspection
from moovsafe.models.maintenance import MaintenanceRecord

__all__ = ["Vehicle", "Inspection", "MaintenanceRecord"]

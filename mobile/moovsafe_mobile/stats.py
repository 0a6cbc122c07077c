"""Fleet figures shown on the home screen."""
from typing import Dict, Iterable, Mapping, Optional


def home_stats(vehicles: Optional[Iterable[Mapping]]) -> Dict[str, int]:
    """Count total, active and in-maintenance vehicles.

    Vehicles without a status are treated as active: when none reports
    ``active`` the active count falls back to the fleet size.
    """
    vehicles = list(vehicles or [])
    if not vehicles:
        return {"total": 0, "active": 0, "maintenance": 0}

    active = sum(1 for v in vehicles if v.get("status") == "active")
    maintenance = sum(1 for v in vehicles if v.get("status") == "maintenance")
    return {
        "total": len(vehicles),
        "active": active or len(vehicles),
        "maintenance": maintenance,
    }

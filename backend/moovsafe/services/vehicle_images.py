"""Stock images assigned to new vehicles by vehicle type."""
import re
from typing import Dict, Mapping

_BASE = "https://res.cloudinary.com/dm5v9praz/image/upload"

# Keys are normalized vehicle types (see normalize_vehicle_type)
VEHICLE_IMAGES: Dict[str, str] = {
    "hatchback": f"{_BASE}/v1760046545/1_qgdrxu.png",
    "sedan": f"{_BASE}/v1760046545/2_dsulb9.png",
    "truck": f"{_BASE}/v1760046563/5_yuras8.png",
    "suv": f"{_BASE}/v1760046562/3_kl0gid.png",
    "pickuptruck": f"{_BASE}/v1760046564/4_z07sna.png",
    "stationwagon": f"{_BASE}/v1760046545/1_qgdrxu.png",
    "panelvan": f"{_BASE}/v1760046563/6_bu2oqw.png",
    "coupe": f"{_BASE}/v1760046568/8_qnnrch.png",
    "convertible": f"{_BASE}/v1760046545/1_qgdrxu.png",
    "sportscar": f"{_BASE}/v1760046563/7_klrskt.png",
    "supercar": f"{_BASE}/v1760046566/9_aqabut.png",
    "default": f"{_BASE}/v1760046545/1_qgdrxu.png",
}


def normalize_vehicle_type(vehicle_type: str) -> str:
    """'Pickup Truck', 'pickup-truck' and 'pickupTruck' all become 'pickuptruck'."""
    return re.sub(r"[\s_\-]", "", vehicle_type or "").lower()


def image_for_vehicle_type(vehicle_type: str, images: Mapping[str, str] = VEHICLE_IMAGES) -> str:
    return images.get(normalize_vehicle_type(vehicle_type), images["default"])


def get_vehicle_images() -> Mapping[str, str]:
    """Dependency returning the stock image table."""
    return VEHICLE_IMAGES

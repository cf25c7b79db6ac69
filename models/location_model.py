import math
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, field_validator

# (latitude, longitude) in degrees
Coordinates = Tuple[float, float]


def validate_coordinates(value: Any) -> Coordinates:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError("coordinates must be a [lat, lon] pair")
    try:
        lat, lon = float(value[0]), float(value[1])
    except (TypeError, ValueError):
        raise ValueError("coordinates must be numeric")
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise ValueError("coordinates must be finite")
    if not -90.0 <= lat <= 90.0:
        raise ValueError(f"latitude {lat} out of range")
    if not -180.0 <= lon <= 180.0:
        raise ValueError(f"longitude {lon} out of range")
    return (lat, lon)


@dataclass(frozen=True)
class ResolvedPlace:
    display_name: str
    coords: Coordinates


class LocationRequest(BaseModel):
    source: Optional[str] = None
    destination: Optional[str] = None


class NewLocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str
    sourceCoords: Coordinates
    destination: str
    destinationCoords: Coordinates

    @field_validator("sourceCoords", "destinationCoords", mode="before")
    @classmethod
    def _check_coords(cls, value):
        return validate_coordinates(value)


class LocationRecord(NewLocation):
    id: str


class RouteResult(BaseModel):
    record: LocationRecord
    distance: str

    def to_response(self) -> Dict[str, Any]:
        return {**self.record.model_dump(mode="json"), "distance": self.distance}


class RouteUpdate(BaseModel):
    """Snapshot of the latest resolved route shared between viewers."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    type: Literal["route_update"] = "route_update"
    id: Optional[str] = None
    source: Optional[str] = None
    sourceCoords: Optional[Coordinates] = None
    destination: Optional[str] = None
    destinationCoords: Optional[Coordinates] = None
    distance: Optional[str] = None

    @field_validator("sourceCoords", "destinationCoords", mode="before")
    @classmethod
    def _check_coords(cls, value):
        if value is None:
            return None
        return validate_coordinates(value)


# New broadcast variants register their tag here
SYNC_MESSAGE_TYPES: Dict[str, Type[BaseModel]] = {
    "route_update": RouteUpdate,
}


def parse_sync_message(data: Any) -> BaseModel:
    """Validate a raw broadcast payload into its tagged message model.

    Untagged payloads are treated as route updates, which is what the map
    client has always sent.
    """
    if not isinstance(data, dict):
        raise ValueError("sync payload must be a JSON object")
    tag = data.get("type") or "route_update"
    if not isinstance(tag, str):
        raise ValueError("sync message type must be a string")
    model = SYNC_MESSAGE_TYPES.get(tag)
    if model is None:
        raise ValueError(f"unknown sync message type '{tag}'")
    return model.model_validate({**data, "type": tag})


def records_to_json(records: List[LocationRecord]) -> List[Dict[str, Any]]:
    return [record.model_dump(mode="json") for record in records]

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Union
import json

from ..encoding import json_str
from ..exceptions import FilterValidationError
from ..validation.schemas import validate_geo_payload


@dataclass(frozen=True)
class Circle:
    """
    Geographic bound: results lie (roughly) within `meters` of the center point.
    """
    latitude: float
    longitude: float
    meters: float

    def to_dict(self) -> Dict[str, Any]:
        return {"$circle": {"center": [self.latitude, self.longitude], "meters": self.meters}}

    def to_json_str(self) -> str:
        return json_str(self.to_dict())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Circle":
        try:
            body = data["$circle"]
            lat, lon = body["center"]
            return cls(latitude=lat, longitude=lon, meters=body["meters"])
        except (KeyError, TypeError, ValueError) as e:
            raise FilterValidationError(f"Not a $circle geo payload: {data!r}") from e


def parse_geo_json(
    payload: Union[str, Dict[str, Any]],
    *,
    validate: bool = True,
) -> Circle:
    """
    Accept the decoded `geo` value (JSON string or dict) and return a Circle.
    """
    if isinstance(payload, str):
        try:
            data = json.loads(payload)
        except ValueError as e:
            raise FilterValidationError(f"geo is not valid JSON: {e}") from e
    else:
        data = payload
    if validate:
        validate_geo_payload(data)
    return Circle.from_dict(data)


__all__ = ["Circle", "parse_geo_json"]

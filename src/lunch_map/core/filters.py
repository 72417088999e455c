"""
Filter engine for the restaurant list

Filtering runs over a small, fully loaded snapshot of the store (tens of
records), so the map page filters in memory. The same criteria can also be
turned into SQL column expressions for the JSON API, which filters in the
database instead.
"""

import logging
import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..config import config
from ..errors import InvalidInput
from .restaurant import CrowdednessLevel, PriceRange, Restaurant, validate_coordinates

logger = logging.getLogger(__name__)

_TRUE_VALUES = frozenset(['true', '1', 'yes', 'on'])
_FALSE_VALUES = frozenset(['false', '0', 'no', 'off'])


@dataclass(frozen=True)
class BoundingBox:
    """Rectangular lat/lon window approximating a search circle

    ``min_lon``/``max_lon`` are None when the window places no constraint
    on longitude (circle centered too close to a pole).
    """
    min_lat: float
    max_lat: float
    min_lon: Optional[float]
    max_lon: Optional[float]

    @property
    def constrains_longitude(self) -> bool:
        return self.min_lon is not None and self.max_lon is not None

    def contains(self, latitude: float, longitude: float) -> bool:
        if not self.min_lat <= latitude <= self.max_lat:
            return False
        if self.constrains_longitude:
            return self.min_lon <= longitude <= self.max_lon
        return True


def bounding_box(latitude: float, longitude: float, radius_km: float,
                 km_per_degree: Optional[float] = None,
                 pole_guard_epsilon: Optional[float] = None) -> BoundingBox:
    """
    Approximate a circle of ``radius_km`` around a point with a lat/lon box

    latitude half-span  = R / 111
    longitude half-span = R / (111 * cos(latitude))

    This is not a great-circle distance. Near the poles cos(latitude)
    approaches zero; below ``pole_guard_epsilon`` (or once the longitude
    half-span would cover the whole globe) the box drops its longitude
    constraint instead of producing an infinite span.
    """
    km_per_degree = km_per_degree or config.filters.km_per_degree
    if pole_guard_epsilon is None:
        pole_guard_epsilon = config.filters.pole_guard_epsilon

    lat_span = radius_km / km_per_degree
    cos_lat = math.cos(math.radians(latitude))

    if cos_lat < pole_guard_epsilon:
        logger.warning(f"Radius filter at latitude {latitude} is degenerate; ignoring longitude")
        return BoundingBox(latitude - lat_span, latitude + lat_span, None, None)

    lon_span = radius_km / (km_per_degree * cos_lat)
    if lon_span >= 180.0:
        logger.warning(f"Radius {radius_km}km at latitude {latitude} spans all longitudes")
        return BoundingBox(latitude - lat_span, latitude + lat_span, None, None)

    return BoundingBox(
        min_lat=latitude - lat_span,
        max_lat=latitude + lat_span,
        min_lon=longitude - lon_span,
        max_lon=longitude + lon_span
    )


def _parse_bool(name: str, value: Any) -> Optional[bool]:
    if value is None or isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text == '':
        return None
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise InvalidInput(f"{name} must be a boolean, got {value!r}")


def _parse_float(name: str, value: Any) -> Optional[float]:
    if value is None or (isinstance(value, str) and value.strip() == ''):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"{name} must be a number, got {value!r}")


def _blank_to_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class FilterCriteria:
    """Optional constraints on the restaurant list; None means unconstrained"""
    cuisine_type: Optional[str] = None
    price_range: Optional[PriceRange] = None
    is_open: Optional[bool] = None
    crowdedness: Optional[CrowdednessLevel] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    radius_km: Optional[float] = None

    def __post_init__(self):
        if self.cuisine_type is not None and not isinstance(self.cuisine_type, str):
            raise InvalidInput(f"Cuisine must be a string, got {self.cuisine_type!r}")
        if self.is_open is not None and not isinstance(self.is_open, bool):
            raise InvalidInput(f"is_open must be a boolean, got {self.is_open!r}")
        for name in ('latitude', 'longitude', 'radius_km'):
            value = getattr(self, name)
            if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float))):
                raise InvalidInput(f"{name} must be a number, got {value!r}")

        if self.price_range is not None:
            try:
                object.__setattr__(self, 'price_range', PriceRange(self.price_range))
            except (TypeError, ValueError):
                raise InvalidInput(f"Unknown price range {self.price_range!r}")
        if self.crowdedness is not None:
            try:
                object.__setattr__(self, 'crowdedness', CrowdednessLevel(self.crowdedness))
            except (TypeError, ValueError):
                raise InvalidInput(f"Unknown crowdedness level {self.crowdedness!r}")

        geo = (self.latitude, self.longitude, self.radius_km)
        if any(value is not None for value in geo):
            if any(value is None for value in geo):
                raise InvalidInput('Radius filter needs latitude, longitude and radius together')
            try:
                validate_coordinates(self.latitude, self.longitude)
            except ValueError as e:
                raise InvalidInput(str(e))
            if not (math.isfinite(self.radius_km) and self.radius_km > 0):
                raise InvalidInput(f"Radius must be a positive number of kilometers, got {self.radius_km!r}")

    @property
    def has_radius(self) -> bool:
        return self.radius_km is not None

    @property
    def is_empty(self) -> bool:
        return all(value is None for value in asdict(self).values())

    def to_dict(self) -> Dict[str, Any]:
        """Present constraints only, with enums as plain strings"""
        data = {}
        for key, value in asdict(self).items():
            if value is None:
                continue
            data[key] = value.value if isinstance(value, (PriceRange, CrowdednessLevel)) else value
        return data

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> 'FilterCriteria':
        if not data:
            return cls()
        if not isinstance(data, Mapping):
            raise InvalidInput(f"Stored filter criteria must be a mapping, got {type(data).__name__}")
        known = {key: data[key] for key in cls.__dataclass_fields__ if key in data}
        return cls(**known)

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> 'FilterCriteria':
        """
        Build criteria from HTTP query/form parameters or CLI options

        Empty values mean "no constraint". Accepts ``cuisine`` or
        ``cuisine_type``, ``lat``/``latitude``, ``lng``/``longitude`` and
        ``radius``/``radius_km``.

        Raises:
            InvalidInput: a value cannot be parsed or is out of range
        """
        def first(*names):
            for name in names:
                value = params.get(name)
                if value is not None and not (isinstance(value, str) and value.strip() == ''):
                    return value
            return None

        return cls(
            cuisine_type=_blank_to_none(first('cuisine', 'cuisine_type')),
            price_range=_blank_to_none(first('price_range', 'price')),
            is_open=_parse_bool('is_open', first('is_open', 'open')),
            crowdedness=_blank_to_none(first('crowdedness', 'crowdedness_level')),
            latitude=_parse_float('latitude', first('lat', 'latitude')),
            longitude=_parse_float('longitude', first('lng', 'lon', 'longitude')),
            radius_km=_parse_float('radius', first('radius', 'radius_km'))
        )

    def bounding_box(self) -> Optional[BoundingBox]:
        if not self.has_radius:
            return None
        return bounding_box(self.latitude, self.longitude, self.radius_km)


def _matches(restaurant: Restaurant, criteria: FilterCriteria, box: Optional[BoundingBox]) -> bool:
    if criteria.cuisine_type is not None and restaurant.cuisine_type != criteria.cuisine_type:
        return False
    if criteria.price_range is not None and restaurant.price_range != criteria.price_range:
        return False
    if criteria.is_open is not None and restaurant.is_open != criteria.is_open:
        return False
    if criteria.crowdedness is not None and restaurant.crowdedness_level != criteria.crowdedness:
        return False
    if box is not None and not box.contains(restaurant.latitude, restaurant.longitude):
        return False
    return True


def matches(restaurant: Restaurant, criteria: FilterCriteria) -> bool:
    """Check a single restaurant against every present constraint"""
    return _matches(restaurant, criteria, criteria.bounding_box())


def filter_restaurants(restaurants: Iterable[Restaurant],
                       criteria: Optional[FilterCriteria] = None) -> List[Restaurant]:
    """
    Select the restaurants satisfying every present constraint

    Args:
        restaurants: Base collection (left untouched)
        criteria: Constraints; None or empty criteria select everything

    Returns:
        New list sorted by name, ties kept in input order
    """
    criteria = criteria or FilterCriteria()
    box = criteria.bounding_box()
    selected = [r for r in restaurants if _matches(r, criteria, box)]
    return sorted(selected, key=lambda r: r.name)


def build_predicate(criteria: Optional[FilterCriteria], model) -> List[Any]:
    """
    Translate criteria into SQLAlchemy expressions over ``model``'s columns

    The expressions are combined with AND by the caller; values are sent as
    bound parameters. Bounds are inclusive, matching ``filter_restaurants``.
    """
    clauses: List[Any] = []
    if criteria is None:
        return clauses

    if criteria.cuisine_type is not None:
        clauses.append(model.cuisine_type == criteria.cuisine_type)
    if criteria.price_range is not None:
        clauses.append(model.price_range == criteria.price_range.value)
    if criteria.is_open is not None:
        clauses.append(model.is_open == criteria.is_open)
    if criteria.crowdedness is not None:
        clauses.append(model.crowdedness_level == criteria.crowdedness.value)

    box = criteria.bounding_box()
    if box is not None:
        clauses.append(model.latitude.between(box.min_lat, box.max_lat))
        if box.constrains_longitude:
            clauses.append(model.longitude.between(box.min_lon, box.max_lon))

    return clauses

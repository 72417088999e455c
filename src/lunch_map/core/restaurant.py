"""
Restaurant records as loaded from the record store
"""

import json
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


class PriceRange(str, Enum):
    """Coarse cost bracket of a restaurant"""
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'


class CrowdednessLevel(str, Enum):
    """Coarse occupancy indicator"""
    EMPTY = 'empty'
    MODERATE = 'moderate'
    CROWDED = 'crowded'


PHOTO_CATEGORIES = frozenset(['exterior', 'interior', 'food', 'menu'])
DEFAULT_PHOTO_CATEGORY = 'food'
_PHOTO_URL_PREFIXES = ('https://', 'http://', '/')


@dataclass(frozen=True)
class RestaurantPhoto:
    """One entry of a restaurant's photo gallery"""
    url: str
    alt: str = ''
    category: str = DEFAULT_PHOTO_CATEGORY

    def to_dict(self) -> Dict[str, str]:
        return {'url': self.url, 'alt': self.alt, 'type': self.category}


def parse_photos(raw: Any) -> Tuple[RestaurantPhoto, ...]:
    """
    Parse the embedded photo structure of a restaurant

    The store keeps photos as a JSON array of ``{"url", "alt", "type"}``
    objects. Anything that cannot be read degrades to no photos; entries
    without a URL are skipped.

    Args:
        raw: JSON text, an already decoded list, or None

    Returns:
        Tuple of photos in gallery order
    """
    if raw is None or raw == '':
        return ()

    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.debug(f"Ignoring unparsable photo data: {e}")
            return ()

    if not isinstance(raw, list):
        logger.debug(f"Ignoring photo data of type {type(raw).__name__}")
        return ()

    photos: List[RestaurantPhoto] = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        url = entry.get('url')
        if not isinstance(url, str) or not url.strip():
            continue
        if not url.strip().startswith(_PHOTO_URL_PREFIXES):
            logger.debug(f"Ignoring photo with unsupported URL: {url}")
            continue
        category = entry.get('type') or entry.get('category')
        if category not in PHOTO_CATEGORIES:
            category = DEFAULT_PHOTO_CATEGORY
        alt = entry.get('alt')
        photos.append(RestaurantPhoto(
            url=url.strip(),
            alt=alt if isinstance(alt, str) else '',
            category=category
        ))
    return tuple(photos)


def validate_coordinates(latitude: float, longitude: float) -> None:
    """Raise ValueError unless latitude/longitude are finite decimal degrees in range"""
    if not (isinstance(latitude, (int, float)) and isinstance(longitude, (int, float))):
        raise ValueError('Coordinates must be numbers')
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise ValueError('Coordinates must be finite')
    if not -90.0 <= latitude <= 90.0:
        raise ValueError(f'Latitude {latitude} out of range [-90, 90]')
    if not -180.0 <= longitude <= 180.0:
        raise ValueError(f'Longitude {longitude} out of range [-180, 180]')


@dataclass(frozen=True)
class Restaurant:
    """Read-only snapshot of one restaurant record"""
    id: int
    name: str
    address: str
    latitude: float
    longitude: float
    cuisine_type: str
    price_range: PriceRange
    is_open: bool = False
    crowdedness_level: CrowdednessLevel = CrowdednessLevel.MODERATE

    phone: Optional[str] = None
    opening_hours: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    capacity: Optional[int] = None
    features: Optional[str] = None
    popular_menu: Optional[str] = None
    access_info: Optional[str] = None
    area: Optional[str] = None
    lunch_hours: Optional[str] = None
    closed_days: Optional[str] = None
    average_budget: Optional[int] = None
    rating: Optional[float] = None
    review_count: Optional[int] = None
    photos: Tuple[RestaurantPhoto, ...] = field(default=(), compare=False)

    created_at: Optional[datetime] = field(default=None, compare=False)
    updated_at: Optional[datetime] = field(default=None, compare=False)

    def __post_init__(self):
        if not isinstance(self.id, int) or isinstance(self.id, bool) or self.id <= 0:
            raise ValueError(f'Restaurant id must be a positive integer, got {self.id!r}')
        validate_coordinates(self.latitude, self.longitude)
        # Coerce plain strings coming from the store into the enums
        object.__setattr__(self, 'price_range', PriceRange(self.price_range))
        object.__setattr__(self, 'crowdedness_level', CrowdednessLevel(self.crowdedness_level or CrowdednessLevel.MODERATE))
        object.__setattr__(self, 'is_open', bool(self.is_open))
        if self.rating is not None and not 1.0 <= self.rating <= 5.0:
            raise ValueError(f'Rating {self.rating} out of range [1, 5]')
        if self.review_count is not None and self.review_count < 0:
            raise ValueError('Review count cannot be negative')

    @property
    def main_photo(self) -> Optional[RestaurantPhoto]:
        return self.photos[0] if self.photos else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            'id': self.id,
            'name': self.name,
            'address': self.address,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'cuisine_type': self.cuisine_type,
            'price_range': self.price_range.value,
            'is_open': self.is_open,
            'crowdedness_level': self.crowdedness_level.value,
            'phone': self.phone,
            'opening_hours': self.opening_hours,
            'website': self.website,
            'description': self.description,
            'capacity': self.capacity,
            'features': self.features,
            'popular_menu': self.popular_menu,
            'access_info': self.access_info,
            'area': self.area,
            'lunch_hours': self.lunch_hours,
            'closed_days': self.closed_days,
            'average_budget': self.average_budget,
            'rating': self.rating,
            'review_count': self.review_count,
            'photos': [photo.to_dict() for photo in self.photos],
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }

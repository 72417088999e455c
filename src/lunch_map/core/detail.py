"""
Single-restaurant lookup for the detail page
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Tuple, Union

from ..errors import InvalidInput, NotFound
from .display import DisplayRecord, crowdedness_display, cuisine_glyph, open_display, price_display
from .restaurant import Restaurant, RestaurantPhoto

logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"[0-9]+")
MAX_RESTAURANT_ID = 2 ** 63 - 1  # SQLite INTEGER


def parse_restaurant_id(raw: Union[str, int]) -> int:
    """
    Validate a restaurant identity taken from a URL or command line

    Raises:
        InvalidInput: not a well-formed positive integer
    """
    if isinstance(raw, bool):
        raise InvalidInput(f"Invalid restaurant ID: {raw!r}")
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str) and _ID_PATTERN.fullmatch(raw):
        value = int(raw)
    else:
        raise InvalidInput(f"Invalid restaurant ID: {raw!r}")

    if value <= 0 or value > MAX_RESTAURANT_ID:
        raise InvalidInput(f"Invalid restaurant ID: {raw!r}")
    return value


@dataclass(frozen=True)
class RestaurantDetail:
    """Everything the detail page shows about one restaurant"""
    restaurant: Restaurant
    glyph: str
    price: DisplayRecord
    crowdedness: DisplayRecord
    status: DisplayRecord

    @property
    def photos(self) -> Tuple[RestaurantPhoto, ...]:
        return self.restaurant.photos

    @classmethod
    def for_restaurant(cls, restaurant: Restaurant) -> 'RestaurantDetail':
        return cls(
            restaurant=restaurant,
            glyph=cuisine_glyph(restaurant.cuisine_type),
            price=price_display(restaurant.price_range),
            crowdedness=crowdedness_display(restaurant.crowdedness_level),
            status=open_display(restaurant.is_open)
        )

    def to_dict(self) -> Dict[str, Any]:
        data = self.restaurant.to_dict()
        data.update({
            'glyph': self.glyph,
            'price_label': self.price.label,
            'crowdedness_label': self.crowdedness.label,
            'status_label': self.status.label
        })
        return data


def get_restaurant_detail(db, raw_id: Union[str, int]) -> RestaurantDetail:
    """
    Fetch one restaurant for display

    Args:
        db: Record store exposing ``get_restaurant_by_id``
        raw_id: Identity as received from the caller

    Raises:
        InvalidInput: malformed identity
        NotFound: no restaurant with that identity
    """
    restaurant_id = parse_restaurant_id(raw_id)
    restaurant = db.get_restaurant_by_id(restaurant_id)
    if restaurant is None:
        logger.warning(f"Restaurant {restaurant_id} not found")
        raise NotFound(f"Restaurant {restaurant_id} not found")
    return RestaurantDetail.for_restaurant(restaurant)

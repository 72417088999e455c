"""
Restaurant records, filtering, view state and detail lookup
"""

from .restaurant import Restaurant, RestaurantPhoto, PriceRange, CrowdednessLevel, parse_photos
from .filters import FilterCriteria, BoundingBox, bounding_box, filter_restaurants, matches
from .view_model import MapViewModel
from .detail import RestaurantDetail, get_restaurant_detail, parse_restaurant_id

__all__ = [
    'Restaurant',
    'RestaurantPhoto',
    'PriceRange',
    'CrowdednessLevel',
    'parse_photos',
    'FilterCriteria',
    'BoundingBox',
    'bounding_box',
    'filter_restaurants',
    'matches',
    'MapViewModel',
    'RestaurantDetail',
    'get_restaurant_detail',
    'parse_restaurant_id'
]

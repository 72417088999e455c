"""
Lunch Map - Tokyo restaurant map

This package provides tools to:
1. Store restaurant records with location, cuisine, price and status
2. Filter restaurants by attributes and by distance from a point
3. Keep map markers in step with the filtered list
4. Serve the map, detail pages and a JSON API
"""

__version__ = "1.0.0"
__author__ = "Lunch Map Team"

from .core.filters import FilterCriteria, filter_restaurants
from .core.restaurant import Restaurant
from .core.view_model import MapViewModel
from .mapping.markers import MapView
from .storage.database import DatabaseManager

__all__ = [
    'FilterCriteria',
    'filter_restaurants',
    'Restaurant',
    'MapViewModel',
    'MapView',
    'DatabaseManager'
]

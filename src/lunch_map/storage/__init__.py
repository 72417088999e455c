"""
Data storage module for restaurant data persistence
"""

from .database import DatabaseManager
from .models import RestaurantModel
from .seed import SAMPLE_RESTAURANTS

__all__ = ['DatabaseManager', 'RestaurantModel', 'SAMPLE_RESTAURANTS']

"""
SQLAlchemy models for restaurant data storage
"""

from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, Text, Index, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import declarative_base, validates
from sqlalchemy.sql import func
from typing import Dict, Any

from ..core.restaurant import CrowdednessLevel, PriceRange, Restaurant, parse_photos, validate_coordinates

Base = declarative_base()

class RestaurantModel(Base):
    """Restaurant record shown on the map"""
    __tablename__ = "restaurants"
    __table_args__ = (
        UniqueConstraint('name', 'address', name='uq_restaurants_name_address'),
        CheckConstraint("price_range IN ('low', 'medium', 'high')", name='ck_restaurants_price_range'),
        CheckConstraint("crowdedness_level IN ('empty', 'moderate', 'crowded')", name='ck_restaurants_crowdedness'),
        CheckConstraint('latitude BETWEEN -90 AND 90', name='ck_restaurants_latitude'),
        CheckConstraint('longitude BETWEEN -180 AND 180', name='ck_restaurants_longitude'),
        CheckConstraint('rating IS NULL OR rating BETWEEN 1 AND 5', name='ck_restaurants_rating'),
        CheckConstraint('review_count IS NULL OR review_count >= 0', name='ck_restaurants_review_count'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    address = Column(String, nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    cuisine_type = Column(String, nullable=False)
    price_range = Column(String, nullable=False)

    phone = Column(String)
    opening_hours = Column(String)
    website = Column(String)
    description = Column(Text)
    capacity = Column(Integer)
    is_open = Column(Boolean, default=False)
    crowdedness_level = Column(String, default=CrowdednessLevel.MODERATE.value)

    # Gallery and listing details
    photos = Column(Text)  # JSON array of {"url", "alt", "type"}
    features = Column(Text)
    popular_menu = Column(Text)
    access_info = Column(Text)
    area = Column(String)
    lunch_hours = Column(String)
    closed_days = Column(String)
    average_budget = Column(Integer)
    rating = Column(Float)
    review_count = Column(Integer)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now())

    @validates('price_range')
    def validate_price_range(self, key, value):
        return PriceRange(value).value

    @validates('crowdedness_level')
    def validate_crowdedness_level(self, key, value):
        if value is None:
            return CrowdednessLevel.MODERATE.value
        return CrowdednessLevel(value).value

    @validates('latitude', 'longitude')
    def validate_coordinate(self, key, value):
        if key == 'latitude':
            validate_coordinates(value, 0.0)
        else:
            validate_coordinates(0.0, value)
        return value

    @validates('rating')
    def validate_rating(self, key, value):
        if value is not None and not 1.0 <= value <= 5.0:
            raise ValueError(f'Rating {value} out of range [1, 5]')
        return value

    @validates('review_count')
    def validate_review_count(self, key, value):
        if value is not None and value < 0:
            raise ValueError('Review count cannot be negative')
        return value

    def to_restaurant(self) -> Restaurant:
        """Detach the row into an immutable snapshot record"""
        return Restaurant(
            id=self.id,
            name=self.name,
            address=self.address,
            latitude=self.latitude,
            longitude=self.longitude,
            cuisine_type=self.cuisine_type,
            price_range=self.price_range,
            is_open=bool(self.is_open),
            crowdedness_level=self.crowdedness_level,
            phone=self.phone,
            opening_hours=self.opening_hours,
            website=self.website,
            description=self.description,
            capacity=self.capacity,
            features=self.features,
            popular_menu=self.popular_menu,
            access_info=self.access_info,
            area=self.area,
            lunch_hours=self.lunch_hours,
            closed_days=self.closed_days,
            average_budget=self.average_budget,
            rating=self.rating,
            review_count=self.review_count,
            photos=parse_photos(self.photos),
            created_at=self.created_at,
            updated_at=self.updated_at
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization, photos left as stored"""
        return {
            'id': self.id,
            'name': self.name,
            'address': self.address,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'cuisine_type': self.cuisine_type,
            'price_range': self.price_range,
            'phone': self.phone,
            'opening_hours': self.opening_hours,
            'website': self.website,
            'description': self.description,
            'capacity': self.capacity,
            'is_open': self.is_open,
            'crowdedness_level': self.crowdedness_level,
            'photos': self.photos,
            'features': self.features,
            'popular_menu': self.popular_menu,
            'access_info': self.access_info,
            'area': self.area,
            'lunch_hours': self.lunch_hours,
            'closed_days': self.closed_days,
            'average_budget': self.average_budget,
            'rating': self.rating,
            'review_count': self.review_count,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }

# Indexes for Restaurant
Index('ix_restaurants_location', RestaurantModel.latitude, RestaurantModel.longitude)
Index('ix_restaurants_cuisine', RestaurantModel.cuisine_type)
Index('ix_restaurants_price', RestaurantModel.price_range)

"""
Restaurant record store backed by SQLAlchemy
"""

import logging
import os
from typing import Dict, List, Optional, Any
import pandas as pd
from contextlib import contextmanager

from sqlalchemy import create_engine, func, text, and_
from sqlalchemy.orm import sessionmaker

from ..config import config, mask_database_url
from ..core.filters import FilterCriteria, build_predicate
from ..core.restaurant import Restaurant
from .models import Base, RestaurantModel
from .seed import SAMPLE_RESTAURANTS

logger = logging.getLogger(__name__)

class DatabaseManager:
    """Read-mostly access to the restaurants table"""

    def __init__(self, database_url: Optional[str] = None, echo: Optional[bool] = None):
        self.database_url = database_url or config.database.url
        # Mask credentials in logs
        masked_url = mask_database_url(self.database_url)
        self.engine = create_engine(self.database_url, echo=config.database.echo if echo is None else echo)
        self.SessionLocal = sessionmaker(autoflush=False, expire_on_commit=False, bind=self.engine)
        logger.info(f"Initialized database with URL: {masked_url}")

        # Create tables
        self.create_tables()

    def create_tables(self):
        """Create the restaurants table and its indexes if absent"""
        try:
            Base.metadata.create_all(bind=self.engine)
            logger.info("Database tables created successfully")
        except Exception as e:
            logger.error(f"Error creating database tables: {e}")
            raise

    @contextmanager
    def get_session(self):
        """Context manager for database sessions"""
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            logger.error(f"Database session error: {e}")
            raise
        finally:
            session.close()

    def insert_restaurants(self, restaurants: List[Dict[str, Any]]) -> int:
        """
        Insert restaurant records, skipping duplicates

        A record is a duplicate when a row with the same name and address
        already exists (or appeared earlier in the same batch). Existing
        rows are never updated.

        Args:
            restaurants: List of restaurant dictionaries

        Returns:
            Number of records inserted
        """
        inserted_count = 0
        seen = set()

        with self.get_session() as session:
            for restaurant_data in restaurants:
                natural_key = (restaurant_data.get('name'), restaurant_data.get('address'))
                try:
                    if natural_key in seen:
                        logger.debug(f"Skipping duplicate restaurant in batch: {natural_key[0]}")
                        continue

                    existing = session.query(RestaurantModel).filter_by(
                        name=natural_key[0], address=natural_key[1]
                    ).first()
                    if existing:
                        logger.debug(f"Restaurant already stored: {natural_key[0]}")
                        seen.add(natural_key)
                        continue

                    session.add(RestaurantModel(**restaurant_data))
                    seen.add(natural_key)
                    inserted_count += 1

                except (TypeError, ValueError) as e:
                    logger.error(f"Error storing restaurant {natural_key[0] or 'unknown'}: {e}")
                    continue

            logger.info(f"Inserted {inserted_count} new restaurant records")
            return inserted_count

    def count_restaurants(self) -> int:
        with self.get_session() as session:
            return session.query(RestaurantModel).count()

    def seed_if_empty(self) -> int:
        """
        Insert the sample data set when the store holds no restaurants

        Returns:
            Number of records inserted (0 when the store was not empty)
        """
        if self.count_restaurants() > 0:
            return 0
        logger.info("Restaurant store is empty, inserting sample data")
        return self.insert_restaurants(SAMPLE_RESTAURANTS)

    def get_all_restaurants(self) -> List[Restaurant]:
        """Get every restaurant ordered by name"""
        with self.get_session() as session:
            rows = session.query(RestaurantModel).order_by(RestaurantModel.name, RestaurantModel.id).all()
            restaurants = [row.to_restaurant() for row in rows]
        logger.info(f"Retrieved {len(restaurants)} restaurant records from database")
        return restaurants

    def get_restaurant_by_id(self, restaurant_id: int) -> Optional[Restaurant]:
        """
        Get a specific restaurant by ID

        Args:
            restaurant_id: Restaurant ID

        Returns:
            Restaurant or None if not found
        """
        with self.get_session() as session:
            row = session.query(RestaurantModel).filter(RestaurantModel.id == restaurant_id).first()
            return row.to_restaurant() if row else None

    def get_restaurants_by_filters(self, criteria: Optional[FilterCriteria]) -> List[Restaurant]:
        """
        Get the restaurants matching the criteria, filtered in SQL

        Args:
            criteria: Filter criteria; None or empty selects everything

        Returns:
            Matching restaurants ordered by name
        """
        clauses = build_predicate(criteria, RestaurantModel)
        with self.get_session() as session:
            query = session.query(RestaurantModel)
            if clauses:
                query = query.filter(and_(*clauses))
            rows = query.order_by(RestaurantModel.name, RestaurantModel.id).all()
            restaurants = [row.to_restaurant() for row in rows]
        logger.info(f"Filter {criteria.to_dict() if criteria else {}} matched {len(restaurants)} restaurants")
        return restaurants

    def load_snapshot(self) -> List[Restaurant]:
        """
        First-run initialization followed by a full read

        Ensures the schema exists, seeds an empty store, then returns
        every restaurant. Failures propagate to the caller.
        """
        self.create_tables()
        self.seed_if_empty()
        return self.get_all_restaurants()

    def get_restaurants_dataframe(self, limit: Optional[int] = None) -> pd.DataFrame:
        """
        Get all restaurants as a pandas DataFrame

        Args:
            limit: Maximum number of records to return

        Returns:
            DataFrame with restaurant data
        """
        with self.get_session() as session:
            query = session.query(RestaurantModel).order_by(RestaurantModel.name, RestaurantModel.id)

            if limit:
                restaurants = query.limit(limit).all()
            else:
                restaurants = query.all()

            if not restaurants:
                logger.info("No restaurant records found")
                return pd.DataFrame()

            # Convert to list of dictionaries
            data = [restaurant.to_dict() for restaurant in restaurants]
            df = pd.DataFrame(data)

            logger.info(f"Retrieved {len(df)} restaurant records from database")
            return df

    def get_stats(self) -> Dict[str, Any]:
        """
        Get summary statistics about the stored restaurants

        Returns:
            Dictionary with counts per cuisine, price range and crowdedness
        """
        with self.get_session() as session:
            total_restaurants = session.query(RestaurantModel).count()
            open_restaurants = session.query(RestaurantModel).filter(RestaurantModel.is_open.is_(True)).count()

            def _grouped(column):
                rows = session.query(column, func.count(RestaurantModel.id)).group_by(column).all()
                return {key: count for key, count in rows}

            return {
                'total_restaurants': total_restaurants,
                'open_restaurants': open_restaurants,
                'by_cuisine': _grouped(RestaurantModel.cuisine_type),
                'by_price_range': _grouped(RestaurantModel.price_range),
                'by_crowdedness': _grouped(RestaurantModel.crowdedness_level)
            }

    def export_to_json(self, filepath: Optional[str] = None) -> str:
        """
        Export restaurant data to JSON file

        Args:
            filepath: Path to export file (optional)

        Returns:
            Path to exported file
        """
        if not filepath:
            filepath = "data/restaurants_export.json"

        try:
            os.makedirs(os.path.dirname(filepath) or '.', exist_ok=True)
            df = self.get_restaurants_dataframe()
            df.to_json(filepath, orient='records', indent=2, force_ascii=False)
            logger.info(f"Exported {len(df)} restaurant records to {filepath}")
            return filepath

        except Exception as e:
            logger.error(f"Error exporting to JSON: {e}")
            raise

    def export_to_csv(self, filepath: Optional[str] = None) -> str:
        """
        Export restaurant data to CSV file

        Args:
            filepath: Path to export file (optional)

        Returns:
            Path to exported file
        """
        if not filepath:
            filepath = "data/restaurants_export.csv"

        try:
            os.makedirs(os.path.dirname(filepath) or '.', exist_ok=True)
            df = self.get_restaurants_dataframe()
            df.to_csv(filepath, index=False)
            logger.info(f"Exported {len(df)} restaurant records to {filepath}")
            return filepath

        except Exception as e:
            logger.error(f"Error exporting to CSV: {e}")
            raise

    def test_connection(self) -> bool:
        """Test database connection"""
        try:
            with self.get_session() as session:
                session.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.error(f"Database connection test failed: {e}")
            return False

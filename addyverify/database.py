"""
Database schema and connection management.

Uses SQLite with SQLAlchemy for location storage. The verification engine
only mutates Location objects in memory; committing is up to the caller.
"""

import math
from pathlib import Path
from typing import List, Optional

from sqlalchemy import create_engine, Column, DateTime, Float, Integer, String
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


class Location(Base):
    """A postal location that can be standardized and geocoded."""

    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    street1 = Column(String, nullable=True)
    street2 = Column(String, nullable=True)
    city = Column(String, nullable=True)
    state = Column(String, nullable=True)
    postal_code = Column(String, nullable=True)

    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    standardized_at = Column(DateTime, nullable=True)
    geocoded_at = Column(DateTime, nullable=True)

    standardize_attempted_at = Column(DateTime, nullable=True)
    standardize_attempted_service = Column(String, nullable=True)
    standardize_attempted_result = Column(String, nullable=True)  # LINZ id of the match
    geocode_attempted_at = Column(DateTime, nullable=True)
    geocode_attempted_service = Column(String, nullable=True)

    def set_location_point(self, latitude: float, longitude: float) -> bool:
        """
        Set the location's coordinates.

        Returns:
            False (leaving the point untouched) if either value is not a
            finite WGS84 coordinate, True otherwise.
        """
        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            return False
        if not (-90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0):
            return False
        self.latitude = latitude
        self.longitude = longitude
        return True

    def __repr__(self) -> str:
        return f"<Location id={self.id} street1={self.street1!r} city={self.city!r}>"


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    engine = create_engine(f"sqlite:///{db_path}")
    Session = sessionmaker(bind=engine)
    return Session()


def add_location(session, **fields) -> Location:
    location = Location(**fields)
    session.add(location)
    session.commit()
    return location


def get_location(session, location_id: int) -> Optional[Location]:
    return session.get(Location, location_id)


def list_locations(session) -> List[Location]:
    return session.query(Location).order_by(Location.id).all()

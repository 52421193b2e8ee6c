"""
Tests for database.py - SQLite location storage.
"""

import math
import pytest

from addyverify.database import (
    Location,
    add_location,
    get_location,
    get_session,
    init_database,
    list_locations,
)


class TestDatabaseInit:
    """Test database initialization."""

    def test_init_creates_database_file(self, tmp_path):
        db_path = tmp_path / "test.db"
        assert not db_path.exists()

        init_database(db_path)

        assert db_path.exists()

    def test_init_creates_parent_directories(self, tmp_path):
        db_path = tmp_path / "nested" / "dir" / "test.db"
        init_database(db_path)
        assert db_path.exists()

    def test_init_creates_tables(self, tmp_path):
        db_path = tmp_path / "test.db"
        init_database(db_path)

        session = get_session(db_path)
        assert session.query(Location).count() == 0
        session.close()


class TestLocationStore:
    """Test storing and loading locations."""

    @pytest.fixture
    def session(self, tmp_path):
        db_path = tmp_path / "test.db"
        init_database(db_path)
        session = get_session(db_path)
        yield session
        session.close()

    def test_add_and_get(self, session):
        location = add_location(session, street1="80A Queen Street", city="Auckland", postal_code="1010")

        loaded = get_location(session, location.id)

        assert loaded.street1 == "80A Queen Street"
        assert loaded.latitude is None

    def test_get_missing(self, session):
        assert get_location(session, 999) is None

    def test_list_in_id_order(self, session):
        add_location(session, street1="1 Main Road")
        add_location(session, street1="2 Main Road")

        streets = [loc.street1 for loc in list_locations(session)]

        assert streets == ["1 Main Road", "2 Main Road"]

    def test_coordinates_persist(self, session):
        location = add_location(session, street1="1 Main Road")
        location.set_location_point(-36.8485, 174.7633)
        session.commit()

        loaded = get_location(session, location.id)
        assert loaded.latitude == pytest.approx(-36.8485)
        assert loaded.longitude == pytest.approx(174.7633)


class TestSetLocationPoint:
    """Test the coordinate assignment primitive."""

    def test_valid_point(self):
        location = Location()
        assert location.set_location_point(-36.8485, 174.7633) is True
        assert location.latitude == -36.8485
        assert location.longitude == 174.7633

    @pytest.mark.parametrize(
        "latitude,longitude",
        [(91.0, 0.0), (-91.0, 0.0), (0.0, 181.0), (0.0, -180.5), (math.nan, 0.0), (0.0, math.inf)],
    )
    def test_invalid_point_rejected(self, latitude, longitude):
        location = Location(latitude=1.0, longitude=2.0)
        assert location.set_location_point(latitude, longitude) is False
        assert location.latitude == 1.0
        assert location.longitude == 2.0

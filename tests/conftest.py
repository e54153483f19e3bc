import os
import random

# Keep the module-level engine off the filesystem during tests.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from sqlalchemy.orm import sessionmaker

from parceltrack.core.constants import ParcelStatus
from parceltrack.database.session import create_all_tables, create_db_engine
from parceltrack.models.parcel import Parcel, utc_timestamp
from parceltrack.repositories import ParcelRepository

SEED = 20241019


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite:///:memory:")
    create_all_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def repo(db) -> ParcelRepository:
    return ParcelRepository(db)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(SEED)


@pytest.fixture
def make_parcel():
    def _make(**overrides) -> Parcel:
        fields = {
            "client": 1000,
            "status": ParcelStatus.REGISTERED,
            "address": "test",
            "created_at": utc_timestamp(),
        }
        fields.update(overrides)
        return Parcel(**fields)

    return _make

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from doctor_slots.database import Base

# Import models so Base.metadata is populated for create_all.
import doctor_slots.models  # noqa: F401


@pytest.fixture(scope="session")
def _unit_engine():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def unit_session_factory(_unit_engine):
    """Session factory bound to the shared in-memory engine; tables emptied after each test."""
    factory = sessionmaker(bind=_unit_engine, expire_on_commit=False, future=True)
    yield factory
    with _unit_engine.begin() as connection:
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())


@pytest.fixture(scope="function")
def unit_db(unit_session_factory) -> Session:
    session = unit_session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

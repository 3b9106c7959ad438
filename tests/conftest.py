import os

# Tests never talk to Redis; the summary cache runs in degraded mode.
os.environ.pop("REDIS_URL", None)
os.environ.setdefault("DATABASE_URL", "sqlite:///./qmedic-test.db")

from datetime import date
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

import qmedic.models  # noqa: F401
from qmedic.core.action_context import ActionContext
from qmedic.core.database import begin_read_only, build_engine, get_db, get_read_db
from qmedic.main import app
from qmedic.models.base import Base
from qmedic.models.item import InventoryItem, ItemCategory


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'qmedic.db'}", lock_timeout_seconds=30)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, future=True)


@pytest.fixture
def impatient_session_factory(engine):
    """
    Sessions on the same database file that give up on a lock after 1s.
    """
    impatient = build_engine(str(engine.url), lock_timeout_seconds=1)
    yield sessionmaker(bind=impatient, autoflush=False, future=True)
    impatient.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    def override_get_read_db():
        session = begin_read_only(session_factory())
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_read_db] = override_get_read_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seed_item(session_factory):
    """
    Insert an item in its own short-lived session and return its scan code.
    """

    def _seed(
        item_id: str = "MED001",
        *,
        name: str = "EpiPen",
        category: ItemCategory = ItemCategory.MEDICATION,
        quantity: int = 5,
        min_quantity: int = 3,
        expiry_date: Optional[date] = None,
        location: str = "Ambulance 1 - Drug Box",
    ) -> str:
        with session_factory() as session:
            session.add(
                InventoryItem(
                    item_id=item_id,
                    name=name,
                    category=category,
                    quantity=quantity,
                    min_quantity=min_quantity,
                    expiry_date=expiry_date,
                    location=location,
                )
            )
            session.commit()
        return item_id

    return _seed


@pytest.fixture
def context() -> ActionContext:
    return ActionContext(user="Medic Rivera", case_id="C10001")

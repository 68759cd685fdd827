import itertools
import os
from datetime import datetime, timedelta
from decimal import Decimal

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/0")
os.environ.setdefault("CELERY_BROKER_URL", "memory://")
os.environ.setdefault("CELERY_RESULT_BACKEND", "cache+memory://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from legacy_orders.data.database import Base, get_db
from legacy_orders.data.models import OrderModel
from legacy_orders.main import create_app

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture
def engine():
    # tabela orders powstaje tylko w testowej bazie, w produkcji nalezy do ERP
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_order(db):
    ids = itertools.count(1000)
    minutes = itertools.count()

    def _make(order_id=None, status="pending", created_at=None,
              customer_name="Jan Kowalski", total_amount=Decimal("100.00")):
        order = OrderModel(
            order_id=order_id if order_id is not None else next(ids),
            customer_name=customer_name,
            total_amount=total_amount,
            status=status,
            created_at=created_at or BASE_TIME + timedelta(minutes=next(minutes)),
        )
        db.add(order)
        db.commit()
        return order.order_id

    return _make


@pytest.fixture
def status_of(db):
    """Status prosto z bazy, z pominieciem identity map."""

    def _status(order_id):
        return db.execute(
            select(OrderModel.status).where(OrderModel.order_id == order_id)
        ).scalar_one()

    return _status


@pytest.fixture
def app(session_factory):
    application = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c

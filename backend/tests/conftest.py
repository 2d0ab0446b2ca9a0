import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import settings
from app.core.fill_status import fill_status_for
from app.db.base import Base
from app.db.session import enable_sqlite_foreign_keys, get_db
from app.main import app
from app.models.dustbin import Dustbin
from app.models.notification import ALERT_TYPE, Notification

HARDWARE_KEY = "test-hardware-key"
USER_ID = "user-1"
OTHER_USER_ID = "user-2"


@pytest.fixture
def engine():
    # One shared in-memory connection so the app's sessions and the test's see the same data
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def client(session_factory, monkeypatch):
    monkeypatch.setattr(settings, "hardware_api_key", HARDWARE_KEY)

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user_headers():
    return {"X-User-Id": USER_ID}


@pytest.fixture
def other_headers():
    return {"X-User-Id": OTHER_USER_ID}


@pytest.fixture
def hardware_headers():
    return {"X-API-Key": HARDWARE_KEY}


@pytest.fixture
def make_dustbin(session_factory):
    """Insert a bin directly and return its id."""

    def _make(user_id=USER_ID, name="Kitchen Wet Bin", fill_level=0, is_active=True, type_="wet"):
        with session_factory() as db:
            row = Dustbin(
                user_id=user_id,
                name=name,
                type=type_,
                location_name="Block A",
                latitude="19.0760",
                longitude="72.8777",
                fill_level=fill_level,
                status=fill_status_for(fill_level).value,
                is_active=is_active,
            )
            db.add(row)
            db.commit()
            return row.id

    return _make


@pytest.fixture
def load_dustbin(session_factory):
    def _load(dustbin_id):
        with session_factory() as db:
            row = db.query(Dustbin).filter(Dustbin.id == dustbin_id).first()
            if row is not None:
                db.expunge(row)
            return row

    return _load


@pytest.fixture
def alerts_for(session_factory):
    def _alerts(dustbin_id):
        with session_factory() as db:
            rows = (
                db.query(Notification)
                .filter(Notification.dustbin_id == dustbin_id, Notification.type == ALERT_TYPE)
                .all()
            )
            for r in rows:
                db.expunge(r)
            return rows

    return _alerts

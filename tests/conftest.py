import os

# Point the app at a throwaway database before any app module is imported
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("PAYMENT_GATEWAY", "simulated")

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, build_engine, get_db, init_db
from app.main import app
from app.models import User
from app.models.enums import UserRole
from app.utils.payment_gateway import PaymentGateway, get_payment_gateway
from app.utils.security import create_access_token, hash_password

API = "/api"


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def file_session_factory(tmp_path):
    """Sessions on a file database, each with its own connection"""
    engine = build_engine(f"sqlite:///{tmp_path / 'eventhub.db'}")
    init_db(engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_payment_gateway] = lambda: PaymentGateway()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    counter = {"n": 0}

    def _make_user(role=UserRole.USER, name=None, email=None, password=None):
        counter["n"] += 1
        user = User(
            name=name or f"Test User {counter['n']}",
            email=email or f"user{counter['n']}@example.com",
            password_hash=hash_password(password) if password else None,
            role=role.value,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def admin(make_user):
    return make_user(UserRole.ADMIN, name="Admin User", email="admin@example.com")


@pytest.fixture
def organizer(make_user):
    return make_user(
        UserRole.ORGANIZER, name="Event Organizer", email="organizer@example.com"
    )


@pytest.fixture
def attendee(make_user):
    return make_user(name="Alice Attendee", email="alice@example.com")


@pytest.fixture
def other_user(make_user):
    return make_user(name="Bob Bystander", email="bob@example.com")


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def organizer_headers(organizer):
    return auth_headers(organizer)


@pytest.fixture
def attendee_headers(attendee):
    return auth_headers(attendee)


@pytest.fixture
def other_headers(other_user):
    return auth_headers(other_user)


def event_payload(**overrides):
    payload = {
        "title": "Python Meetup",
        "description": "Monthly meetup for Python developers",
        "date": (date.today() + timedelta(days=30)).isoformat(),
        "time": "18:30",
        "location": "Community Hall, Springfield",
        "category": "workshop",
        "privacy": "public",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def create_event(client, organizer_headers):
    def _create_event(headers=None, **overrides):
        response = client.post(
            f"{API}/events",
            json=event_payload(**overrides),
            headers=headers or organizer_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]["event"]

    return _create_event


@pytest.fixture
def create_ticket(client, organizer_headers):
    def _create_ticket(event_id, headers=None, **overrides):
        payload = {
            "eventId": event_id,
            "name": "General Admission",
            "price": 25.0,
            "quantity": 100,
            "type": "regular",
        }
        payload.update(overrides)
        response = client.post(
            f"{API}/tickets", json=payload, headers=headers or organizer_headers
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]["ticket"]

    return _create_ticket


@pytest.fixture
def event(create_event):
    return create_event()


@pytest.fixture
def ticket(event, create_ticket):
    return create_ticket(event["id"])


@pytest.fixture
def register(client):
    def _register(headers, event_id, ticket_id, quantity=1):
        return client.post(
            f"{API}/attendees/register",
            json={"eventId": event_id, "ticketId": ticket_id, "quantity": quantity},
            headers=headers,
        )

    return _register


@pytest.fixture
def headers_for():
    return auth_headers


@pytest.fixture
def make_event_payload():
    return event_payload

"""Test configuration and fixtures."""

from datetime import date, datetime, time, timedelta

import pytest

from jobboard import create_app
from jobboard.config import TestConfig
from jobboard.models import User, db
from jobboard.store import service_store

PASSWORD = "secret123"

COMPLETE_PROFILE = {
    "first_name": "Ada",
    "last_name": "Lovelace",
    "email": "ada@example.com",
    "role": "candidate",
    "country": "Spain",
    "city": "Madrid",
}


def tomorrow():
    return date.today() + timedelta(days=1)


@pytest.fixture
def app(tmp_path):
    app = create_app(TestConfig, UPLOAD_FOLDER=str(tmp_path / "upload"))
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def candidate(app):
    """A signed-in candidate whose profile is still incomplete."""
    client = app.test_client()
    client.post("/register", data={"email": "ada@example.com", "password": PASSWORD})
    return client


@pytest.fixture
def complete_candidate(candidate):
    candidate.post("/profile/edit", data=COMPLETE_PROFILE)
    return candidate


@pytest.fixture
def admin(app):
    client = app.test_client()
    client.post("/register", data={"email": "admin@example.com", "password": PASSWORD})
    return client


@pytest.fixture
def user_id(app):
    def user_id(email):
        with app.app_context():
            return User.query.filter_by(email=email).one().id

    return user_id


@pytest.fixture
def make_job(app):
    """Insert a posting directly and return its id."""

    def make_job(**values):
        data = {
            "title": "QA Engineer",
            "description": "Test",
            "salary_range": "30k-40k",
            "expires_at": datetime.combine(tomorrow(), time.min),
            "status": "active",
        }
        data.update(values)
        with app.app_context():
            return service_store().table("jobs").insert(data).id

    return make_job

import os
import tempfile

# Settings are read at import time, so the environment must be prepared first
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ADMIN_USERNAME", "admin@afyaconnect.test")
os.environ.setdefault("ADMIN_PASSWORD", "admin-password")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="afyaconnect-uploads-"))
os.environ.pop("DATABASE_URL", None)

import pytest  # noqa: E402
from unittest.mock import patch  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from afyaconnect.api.main import app  # noqa: E402
from afyaconnect.core.config import settings  # noqa: E402
from afyaconnect.db import ensure_db  # noqa: E402


@pytest.fixture(autouse=True)
def test_db(tmp_path):
    """Fresh, seeded SQLite store for every test."""
    db_path = str(tmp_path / "afyaconnect.db")
    ensure_db(db_path)
    with patch("afyaconnect.core.config.settings.DB_PATH", db_path):
        yield db_path


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def admin_headers(client):
    resp = client.post(
        "/api/auth/login",
        json={"email": settings.ADMIN_USERNAME, "password": settings.ADMIN_PASSWORD},
    )
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
def register_user(client):
    """Register a patient and return bearer headers for them."""

    def _register(email="patient@example.com", password="secret123"):
        resp = client.post(
            "/api/auth/register",
            json={
                "email": email,
                "password": password,
                "firstName": "Amina",
                "lastName": "Otieno",
                "country": "Kenya",
            },
        )
        assert resp.status_code == 201, resp.text
        return {"Authorization": f"Bearer {resp.json()['token']}"}

    return _register


@pytest.fixture
def user_headers(register_user):
    return register_user()


@pytest.fixture
def testimonial_fields():
    return {
        "patientName": "Amina Otieno",
        "patientCountry": "Kenya",
        "patientAge": "42",
        "treatmentType": "Cardiology",
        "hospitalName": "City Medical Center",
        "doctorName": "Dr. Rajesh Kumar",
        "rating": "5",
        "testimonialText": "The cardiac team was outstanding from start to finish.",
        "costSaved": "12000",
        "tags": "Excellent care,Affordable",
    }

import asyncio
import io
import os
import tempfile

WORK_DIR = tempfile.mkdtemp(prefix="hotel_site_test_")

# File database: store calls run on executor threads, each with its own connection
os.environ["DATABASE_URL"] = f"sqlite:///{WORK_DIR}/test.db"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ADMIN_EMAILS"] = "admin@hotelgrand.com"
os.environ["REDIS_URL"] = ""
os.environ["LOG_DIR"] = os.path.join(WORK_DIR, "logs")

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from hotel_site.db.session import Base, engine
from hotel_site.main import app
from hotel_site.models.facility import Facility  # noqa: F401
from hotel_site.models.footer_logo import FooterLogo  # noqa: F401
from hotel_site.models.review import Review  # noqa: F401
from hotel_site.models.room import Room  # noqa: F401
from hotel_site.models.service import Service  # noqa: F401
from hotel_site.models.site_setting import SiteSetting  # noqa: F401
from hotel_site.models.user import User, UserRole  # noqa: F401
from hotel_site.resources.subscription import ChangeBroker, ChangeSubscription

ADMIN_EMAIL = "admin@hotelgrand.com"
GUEST_EMAIL = "tamu@hotelgrand.com"
PASSWORD = "rahasia123"


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def broker():
    return ChangeBroker()


@pytest.fixture
async def subscriptions(broker):
    subs = ChangeSubscription(broker)
    yield subs
    subs.close()
    await asyncio.sleep(0)


async def eventually(predicate, timeout: float = 2.0):
    """Wait for a notification-driven condition to become true."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met in time")
        await asyncio.sleep(0.01)


def png_bytes(size=(4, 4)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color=(200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


# ---------- HTTP ----------
@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def sign_up(client, email: str, full_name: str = "Budi Santoso") -> dict:
    response = client.post("/auth/signup", json={
        "full_name": full_name,
        "email": email,
        "password": PASSWORD,
        "confirm_password": PASSWORD,
    })
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def admin_headers(client):
    return sign_up(client, ADMIN_EMAIL, "Admin Hotel")


@pytest.fixture
def guest_headers(client):
    return sign_up(client, GUEST_EMAIL)

"""
Pytest configuration and fixtures.

Each test gets its own SQLite database (aiosqlite) seeded with a small
slice of the Honduran location catalogue, a fakeredis client and a
temporary upload directory, all injected into `create_app`.
"""

# Standard library imports
import os
from pathlib import Path
import tempfile

_TEST_ROOT = Path(tempfile.mkdtemp(prefix="consulta-tests-"))

# Set test environment before the settings module is imported
os.environ["ENVIRONMENT"] = "dev"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret-key-not-for-production-use"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_ROOT / 'default.db'}"
os.environ["UPLOAD_DIR"] = str(_TEST_ROOT / "uploads")
os.environ["BCRYPT_ROUNDS"] = "4"

# Third-party imports
from fakeredis import aioredis as fake_aioredis
from fastapi.testclient import TestClient
import pytest

# Local application imports
from consulta.core.db import Database
from consulta.models.auth.user import User, UserRole
from consulta.models.locations import Department, Locality, Municipality, Zone
from consulta.models.sectors import Sector
from consulta.services.storage.image_storage import ImageStorageService
from consulta.settings import settings
from consulta.utils.password_utils import get_password_hash
from main import create_app

STAFF_PASSWORD = "clave-segura-123"

TEGUCIGALPA_ID = 801
ALUBAREN_ID = 802
SAN_PEDRO_SULA_ID = 501
KENNEDY_ID = 1
HATILLO_ID = 2
GUAMILITO_ID = 3


def reference_rows() -> list:
    return [
        Department(id="08", name="Francisco Morazán", geocode="08", latitude="14.0723", longitude="-87.1921"),
        Department(id="05", name="Cortés", geocode="05", latitude="15.5", longitude="-88.0333"),
        Municipality(
            id=TEGUCIGALPA_ID,
            name="Distrito Central",
            department_id="08",
            geocode="01",
            latitude="14.0818",
            longitude="-87.2068",
        ),
        Municipality(id=ALUBAREN_ID, name="Alubarén", department_id="08", geocode="02"),
        Municipality(id=SAN_PEDRO_SULA_ID, name="San Pedro Sula", department_id="05", geocode="01"),
        Locality(
            id=KENNEDY_ID,
            name="Colonia Kennedy",
            municipality_id=TEGUCIGALPA_ID,
            area=Zone.URBANO,
            geocode="0001",
            latitude="14.05",
            longitude="-87.17",
        ),
        Locality(
            id=HATILLO_ID,
            name="Aldea El Hatillo",
            municipality_id=TEGUCIGALPA_ID,
            area=Zone.RURAL,
            geocode="0002",
        ),
        Locality(
            id=GUAMILITO_ID,
            name="Barrio Guamilito",
            municipality_id=SAN_PEDRO_SULA_ID,
            area=Zone.URBANO,
            geocode="0003",
        ),
        Sector(name="Salud", active=True),
        Sector(name="Educación", active=True),
        Sector(name="Infraestructura", active=True),
        Sector(name="Minería", active=False),
    ]


def staff_rows() -> list[User]:
    def user(username: str, role: UserRole, active: bool = True) -> User:
        return User(
            username=username,
            hashed_password=get_password_hash(STAFF_PASSWORD),
            role=role,
            active=active,
            email=f"{username.lower()}@consulta.hn",
        )

    return [
        user("planner", UserRole.PLANIFICADOR),
        user("gestor", UserRole.ADMIN),
        user("citizen", UserRole.CIUDADANO),
        user("inactive", UserRole.ADMIN, active=False),
        user("SPE", UserRole.SUPER_ADMIN),
    ]


@pytest.fixture
async def database(tmp_path):
    """Fresh SQLite database with reference data and staff accounts."""
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'consulta.db'}")
    await database.create_all()
    async with database.session() as session:
        session.add_all(reference_rows())
        session.add_all(staff_rows())
        await session.commit()
    yield database
    await database.dispose()


@pytest.fixture
def redis_client():
    return fake_aioredis.FakeRedis(decode_responses=True)


@pytest.fixture
def image_storage(tmp_path):
    return ImageStorageService(tmp_path / "uploads")


@pytest.fixture
def client(database, redis_client, image_storage):
    app = create_app(database=database, redis_client=redis_client, image_storage=image_storage)
    with TestClient(app) as test_client:
        yield test_client


def login_as(client: TestClient, username: str, password: str = STAFF_PASSWORD):
    """Log in through the API; the auth cookie stays on the client."""
    client.cookies.clear()
    response = client.post(f"{settings.API_PREFIX}/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response


@pytest.fixture
def as_super_admin(client):
    login_as(client, settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)
    return client


@pytest.fixture
def as_admin(client):
    login_as(client, "gestor")
    return client


@pytest.fixture
def as_planner(client):
    login_as(client, "planner")
    return client


@pytest.fixture
def anonymous_payload() -> dict:
    return {
        "personType": "anonimo",
        "departmentId": "08",
        "municipalityId": TEGUCIGALPA_ID,
        "localityId": KENNEDY_ID,
        "message": "Test",
        "selectedSectors": ["Salud"],
        "mobile": "99998888",
    }


@pytest.fixture
def natural_payload() -> dict:
    return {
        "personType": "natural",
        "firstName": "María",
        "lastName": "García",
        "identity": "0801-1988-01234",
        "email": "maria@example.com",
        "mobile": "9999-8888",
        "departmentId": "08",
        "municipalityId": TEGUCIGALPA_ID,
        "zone": "urbano",
        "localityId": KENNEDY_ID,
        "message": "Falta alumbrado público en nuestra colonia.",
        "selectedSectors": ["Infraestructura", "Salud"],
    }

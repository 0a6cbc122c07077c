import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import moovsafe.models  # noqa: F401
from moovsafe.core.database import Base, get_db
from moovsafe.main import app
from moovsafe.services.media import ImageStore, ImageStoreError, StoredImage, get_image_store

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeImageStore(ImageStore):
    """In-memory stand-in for the image host."""

    def __init__(self):
        self.uploads = []
        self.deleted = []
        self.fail_uploads = False
        self.fail_deletes = False
        # Optional (folder, filename) -> bool deciding which uploads fail
        self.fail_when = None

    async def upload(self, content, filename, folder):
        if self.fail_uploads or (self.fail_when and self.fail_when(folder, filename)):
            raise ImageStoreError("upload rejected")
        public_id = f"{folder}/{len(self.uploads)}-{filename}"
        self.uploads.append({"public_id": public_id, "filename": filename, "content": content})
        return StoredImage(url=f"https://images.test/{public_id}", public_id=public_id)

    async def delete(self, public_ids):
        if self.fail_deletes:
            raise ImageStoreError("delete rejected")
        self.deleted.extend(public_ids)


@pytest.fixture()
def db_session():
    Base.metadata.create_all(engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(engine)


@pytest.fixture()
def image_store():
    return FakeImageStore()


@pytest.fixture()
def app_overrides(db_session, image_store):
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_store] = lambda: image_store
    yield app
    app.dependency_overrides.clear()


@pytest.fixture()
def client(app_overrides):
    return TestClient(app_overrides)


@pytest.fixture()
def anyio_backend():
    return "asyncio"


def vehicle_payload(**overrides):
    payload = {
        "make": "Toyota",
        "model": "Corolla",
        "year": 2021,
        "vin": "JTDBR32E720012345",
        "engineNumber": "ENG-2ZR-0001",
        "licensePlate": "ABC123GP",
        "fuelType": "Petrol",
        "transmission": "Automatic",
        "currentMileage": 45000,
        "colour": "White",
        "vehicleType": "Sedan",
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def make_vehicle(client):
    def _make(**overrides):
        resp = client.post("/api/vehicles", json=vehicle_payload(**overrides))
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _make

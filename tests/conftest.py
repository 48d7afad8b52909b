import os
import tempfile

# must be set before papernotes.shared.config is imported
os.environ["DB_URL"] = f"sqlite:///{tempfile.mkdtemp()}/papernotes-test.db"
os.environ.pop("GROQ_API_KEY", None)
os.environ["AUTH_DEMO"] = "true"
os.environ["DEMO_TOKEN"] = "demo"

import pytest
from fastapi.testclient import TestClient

from papernotes.main import app
from papernotes.shared.db import Base, engine, SessionLocal
from papernotes.shared.auth import create_access_token

@pytest.fixture(autouse=True)
def _fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield

@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()

@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c

@pytest.fixture
def auth():
    return {"Authorization": "Bearer demo"}

@pytest.fixture
def other_auth():
    return {"Authorization": f"Bearer {create_access_token(sub='someone-else')}"}

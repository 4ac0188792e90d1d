import os
import sys
import tempfile

# ensure backend package is on path for tests
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# configure before the app is imported: throwaway sqlite file, cheap hashing
_tmpdir = tempfile.mkdtemp(prefix='donatehub-tests-')
os.environ['DATABASE_URL'] = f"sqlite:///{os.path.join(_tmpdir, 'test.db')}"
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['JWT_SECRET_KEY'] = 'test-secret'

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app import models
from app.database import Base, SessionLocal, engine, utcnow


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def register(client, name, email, role, password='secret123'):
    resp = client.post('/api/auth/register', json={'name': name, 'email': email, 'password': password, 'role': role})
    assert resp.status_code == 201, resp.text
    data = resp.json()
    return {'user': data['user'], 'token': data['token'], 'headers': {'Authorization': f"Bearer {data['token']}"}}


@pytest.fixture
def org(client):
    return register(client, 'Org A', 'org-a@example.org', 'organization')


@pytest.fixture
def other_org(client):
    return register(client, 'Org B', 'org-b@example.org', 'organization')


@pytest.fixture
def supporter(client):
    return register(client, 'Sam Supporter', 'sam@example.com', 'supporter')


@pytest.fixture
def campaign(client, org):
    payload = {'title': 'Clean water', 'description': 'Wells for villages', 'category': 'health', 'goalAmount': 1000}
    resp = client.post('/api/campaigns', json=payload, headers=org['headers'])
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
def make_user(db):
    """Insert users directly, for service-level tests that skip HTTP."""
    def _make(name, role, email=None):
        user = models.User(name=name, email=email or f"{name.lower().replace(' ', '.')}@example.com",
                           password_hash='x', role=role, created_at=utcnow())
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


@pytest.fixture
def register_user(client):
    def _register(name, email, role, password='secret123'):
        return register(client, name, email, role, password)
    return _register

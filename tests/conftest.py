import os
import sys
from pathlib import Path

# Ajoute la racine du projet au PYTHONPATH EN PREMIER
sys.path.insert(0, str(Path(__file__).parent.parent))

# SQLite pour les tests, AVANT d'importer l'app (le engine est créé à l'import)
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient

from taskpad.core.database import Base, SessionLocal, engine
from taskpad.main import app


@pytest.fixture(autouse=True)
def setup_teardown():
    """Crée et nettoie la DB avant/après chaque test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """Client de test FastAPI"""
    return TestClient(app)


@pytest.fixture
def db():
    """Session DB pour les tests"""
    db = SessionLocal()
    yield db
    db.close()


def register(client, email="test@example.com", name="Test User", password="pass123"):
    response = client.post(
        "/api/auth/register",
        json={"email": email, "name": name, "password": password}
    )
    assert response.status_code == 200, response.text
    # on repart sans cookie : les tests passent le token explicitement
    client.cookies.clear()
    return response.json()


@pytest.fixture
def auth_token(client):
    """Crée un utilisateur et retourne son token JWT"""
    return register(client)["token"]


@pytest.fixture
def auth_headers(auth_token):
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def other_headers(client):
    """Headers d'un second utilisateur"""
    token = register(client, email="other@example.com", name="Other")["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register_user(client):
    """Fabrique d'utilisateurs : register_user(email=..., password=...)"""
    def _register(**kwargs):
        return register(client, **kwargs)
    return _register

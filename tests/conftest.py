# tests/conftest.py
import os

# must be set before the app (and its cached settings) is imported
os.environ["DATABASE_URL"] = "sqlite://"

import pytest

from app.core.database import Base, engine
import app.main  # noqa: F401,E402  registers models and creates tables


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield

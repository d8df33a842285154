"""
Shared pytest fixtures.

Uses a file-backed SQLite database so no Postgres is required for tests.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_habits.db")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from app.db.base import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models.tactic import Tactic  # noqa: E402
from app.models.stage import HabitStage  # noqa: E402

SQLITE_URL = "sqlite:///./test_habits.db"

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

_DEFAULT_TACTICS = [
    ("Implementation intention", "I will [behavior] at [time] in [location].", HabitStage.cue,      True),
    ("Habit stacking",           "After [current habit], I will [new habit].", HabitStage.cue,      True),
    ("Temptation bundling",      "Pair a want-to with a need-to.",             HabitStage.craving,  True),
    ("Two-minute rule",          "Scale the habit down to two minutes.",       HabitStage.response, True),
    ("Habit tracker",            "Track the habit and never miss twice.",      HabitStage.reward,   True),
    ("Increase friction",        "Add steps between you and the bad habit.",  HabitStage.response, False),
]


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    # Seed the tactic catalogue (normally done by Alembic migration)
    db = TestingSessionLocal()
    try:
        for name, description, stage, build in _DEFAULT_TACTICS:
            db.add(Tactic(
                name=name,
                icon_url=f"icons/{name.lower().replace(' ', '-')}.svg",
                description=description,
                part_of_habit=stage,
                build=build,
            ))
        db.commit()
    finally:
        db.close()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(db):
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()

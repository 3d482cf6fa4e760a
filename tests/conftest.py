"""Shared fixtures: an isolated database for the CLI and in-memory sessions for crud tests."""

import logging
import os
import tempfile

# Point the application settings at a throwaway database before anything
# imports lingo_review.config.
_TMP_DIR = tempfile.mkdtemp(prefix="lingo_review_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'cli.db')}"

import pytest
import structlog
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import lingo_review.models  # noqa: F401,E402
from lingo_review.database import Base
from lingo_review.crud import create_learner, create_scenario, add_vocabulary_items
from lingo_review.schemas import LearnerCreate, ScenarioCreate, VocabularyItemCreate


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    # CLI runs bind handlers to streams that are closed afterwards
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    structlog.reset_defaults()


@pytest.fixture
def db():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def learner(db):
    return create_learner(db, LearnerCreate(username="ana", email="ana@example.com"))


@pytest.fixture
def catalog(db):
    create_scenario(db, ScenarioCreate(id="cafe", title="At the Cafe", language="spanish"))
    create_scenario(db, ScenarioCreate(id="gare", title="At the Station", language="french"))
    add_vocabulary_items(db, [
        VocabularyItemCreate(id="cafe-1", scenario_id="cafe", word="el cafe", translation="coffee", language="spanish"),
        VocabularyItemCreate(id="cafe-2", scenario_id="cafe", word="la cuenta", translation="the bill", language="spanish"),
        VocabularyItemCreate(id="gare-1", scenario_id="gare", word="le billet", translation="the ticket", language="french"),
    ])
    return ["cafe-1", "cafe-2", "gare-1"]

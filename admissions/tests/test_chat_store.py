"""
Test the SQLAlchemy-backed chat store against an in-memory SQLite database.
"""

from contextlib import contextmanager
from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from admissions.logic.constants import CHAT_HISTORY_COLLECTION, FAQ_COLLECTION, RECOMMENDATION_COLLECTION
from admissions.logic.errors import UpstreamFailure
from admissions.models import Base
from admissions.store import SqlChatStore


@pytest.fixture
def store():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    @contextmanager
    def session_scope():
        db = Session()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    yield SqlChatStore(session_scope)
    engine.dispose()


def test_append_record_returns_stored_row(store):
    stored = store.append_record(CHAT_HISTORY_COLLECTION, {
        "user_id": "u1",
        "sender": "user",
        "question": "Hello",
        "answer": "Hi there",
        "path": "canned",
    })

    assert stored["id"] == 1
    assert stored["question"] == "Hello"
    assert isinstance(stored["timestamp"], datetime)


def test_query_filters_orders_and_limits(store):
    for i, user in enumerate(["u1", "u2", "u1", "u1"]):
        store.append_record(CHAT_HISTORY_COLLECTION, {
            "user_id": user,
            "sender": "user",
            "question": f"question {i}",
            "answer": f"answer {i}",
            "path": "dataset",
            "timestamp": datetime(2025, 1, 1 + i),
        })

    rows = store.query(CHAT_HISTORY_COLLECTION, {"user_id": "u1"}, order_by="timestamp", limit=2)
    assert [r["question"] for r in rows] == ["question 3", "question 2"]

    oldest_first = store.query(CHAT_HISTORY_COLLECTION, {"user_id": "u1"}, order_by="timestamp", descending=False)
    assert [r["question"] for r in oldest_first] == ["question 0", "question 2", "question 3"]


def test_json_columns_round_trip(store):
    store.append_record(RECOMMENDATION_COLLECTION, {
        "user_id": "u1",
        "grades": {"english": "A1"},
        "aggregate": 6,
        "recommendations": [{"name": "LLB", "cutoff": 6}],
    })

    rows = store.query(RECOMMENDATION_COLLECTION, {"user_id": "u1"})
    assert rows[0]["recommendations"] == [{"name": "LLB", "cutoff": 6}]


def test_faqs_default_frequency(store):
    store.append_record(FAQ_COLLECTION, {"question": "Q", "answer": "A"})
    assert store.query(FAQ_COLLECTION, order_by="frequency")[0]["frequency"] == 1


def test_unknown_collection(store):
    with pytest.raises(ValueError):
        store.append_record("users", {"name": "x"})


def test_database_errors_become_upstream_failures(store):
    # question is NOT NULL
    with pytest.raises(UpstreamFailure):
        store.append_record(CHAT_HISTORY_COLLECTION, {"user_id": "u1", "answer": "A"})


def test_get_update_delete(store):
    faq = store.append_record(FAQ_COLLECTION, {"question": "Q", "answer": "A"})

    assert store.get(FAQ_COLLECTION, faq["id"])["answer"] == "A"

    updated = store.update(FAQ_COLLECTION, faq["id"], {"answer": "B"})
    assert updated["answer"] == "B"
    assert updated["question"] == "Q"

    assert store.delete(FAQ_COLLECTION, faq["id"]) is True
    assert store.get(FAQ_COLLECTION, faq["id"]) is None


def test_missing_records(store):
    assert store.get(FAQ_COLLECTION, 99) is None
    assert store.update(FAQ_COLLECTION, 99, {"answer": "B"}) is None
    assert store.delete(FAQ_COLLECTION, 99) is False


def test_record_faq_bumps_frequency(store):
    store.record_faq("What is the cut off for LLB?", "6")
    store.record_faq("what is the cut off for llb?  ", "Six")
    store.record_faq("How much are the fees?", "GHS 2,312.50")

    faqs = store.query(FAQ_COLLECTION, order_by="frequency")
    assert [(f["question"], f["frequency"], f["answer"]) for f in faqs] == [
        ("What is the cut off for LLB?", 2, "Six"),
        ("How much are the fees?", 1, "GHS 2,312.50"),
    ]

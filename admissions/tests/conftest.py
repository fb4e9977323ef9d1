"""
Shared fixtures for the admissions tests.

No network or database server is needed: the LLM and the store are replaced
with in-memory fakes, and db.py is pointed at an in-memory SQLite URL.
"""

import os
import sys

os.environ.setdefault("DATABASE_URL", "sqlite://")
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

import pytest

from admissions.logic import ProgramCatalog
from admissions.logic.constants import FAQ_COLLECTION
from admissions.logic.errors import UpstreamFailure


class FakeLLM:
    """Records every prompt; returns a fixed answer or raises."""

    def __init__(self, answer="KNUST graduates of this program work across many industries.", error=None):
        self.answer = answer
        self.error = error
        self.calls = []

    def complete(self, system_prompt, user_prompt, temperature, max_tokens):
        self.calls.append({
            "system_prompt": system_prompt,
            "user_prompt": user_prompt,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        if self.error:
            raise self.error
        return self.answer


class FakeStore:
    """In-memory stand-in for SqlChatStore."""

    def __init__(self, fail=False):
        self.fail = fail
        self.collections = {}

    def append_record(self, collection, record):
        if self.fail:
            raise UpstreamFailure(f"Could not write to {collection}")
        rows = self.collections.setdefault(collection, [])
        stored = dict(record, id=len(rows) + 1)
        rows.append(stored)
        return stored

    def query(self, collection, filters=None, order_by=None, descending=True, limit=None):
        rows = [
            r for r in self.collections.get(collection, [])
            if all(r.get(k) == v for k, v in (filters or {}).items())
        ]
        if order_by:
            rows = sorted(rows, key=lambda r: r.get(order_by), reverse=descending)
        return rows[:limit] if limit else rows

    def get(self, collection, record_id):
        for row in self.collections.get(collection, []):
            if row["id"] == record_id:
                return row
        return None

    def update(self, collection, record_id, changes):
        row = self.get(collection, record_id)
        if row is not None:
            row.update(changes)
        return row

    def delete(self, collection, record_id):
        row = self.get(collection, record_id)
        if row is None:
            return False
        self.collections[collection].remove(row)
        return True

    def record_faq(self, question, answer):
        if self.fail:
            raise UpstreamFailure("Could not write to faqs")
        for row in self.collections.get(FAQ_COLLECTION, []):
            if row["question"].lower() == question.strip().lower():
                row["frequency"] += 1
                row["answer"] = answer
                return row
        return self.append_record(FAQ_COLLECTION, {"question": question.strip(), "answer": answer, "frequency": 1})


@pytest.fixture(scope="session")
def catalog():
    return ProgramCatalog.from_defaults()


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def failing_llm():
    return FakeLLM(error=UpstreamFailure("OpenAI request failed: timeout"))


@pytest.fixture
def fake_store():
    return FakeStore()

import os

# settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret"
os.environ["LLM_API_KEY"] = "test-llm-key"
os.environ["ADMIN_EMAILS"] = "[]"

import time
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from algoprep.db.base import Base, SessionLocal, engine
from algoprep.main import app
from algoprep.models import Pattern, Problem, Topic
from algoprep.services import review_service
from algoprep.services.review_cache import ReviewCache

USER_ID = "11111111-1111-1111-1111-111111111111"
OTHER_USER_ID = "22222222-2222-2222-2222-222222222222"


def make_token(user_id: str, email: str = "user@example.com") -> str:
    claims = {
        "sub": user_id,
        "email": email,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(time.time()) + 3600,
    }
    return jwt.encode(claims, os.environ["SUPABASE_JWT_SECRET"], algorithm="HS256")


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def fresh_review_cache(monkeypatch):
    cache = ReviewCache()
    monkeypatch.setattr(review_service, "review_cache", cache)
    return cache


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {make_token(USER_ID)}"}


@pytest.fixture
def other_headers():
    return {"Authorization": f"Bearer {make_token(OTHER_USER_ID, 'other@example.com')}"}


@pytest.fixture
def seed_tags(db):
    db.add_all([
        Topic(id="arrays", name="Arrays"),
        Topic(id="graphs", name="Graphs"),
        Topic(id="strings", name="Strings"),
        Pattern(id="two_pointers", name="Two Pointers"),
        Pattern(id="sliding_window", name="Sliding Window"),
    ])
    db.commit()


@pytest.fixture
def make_problem(db, seed_tags):
    def _make(
        title: str,
        difficulty: str = "medium",
        topics: Optional[List[str]] = None,
        patterns: Optional[List[str]] = None,
    ) -> Problem:
        p = Problem(title=title, description=f"{title} description", difficulty=difficulty)
        p.topics = [db.get(Topic, t) for t in (topics or [])]
        p.patterns = [db.get(Pattern, t) for t in (patterns or [])]
        db.add(p)
        db.commit()
        db.refresh(p)
        return p

    return _make


QUICK_REVIEW = {
    "score": 72,
    "initialFeedback": "Works, but the nested loop is slow.",
    "timeComplexity": "O(n^2)",
    "spaceComplexity": "O(1)",
}

FULL_REVIEW = {
    "score": 85,
    "approach": {"rating": "good", "feedback": "Hash map lookup.", "details": "Single pass."},
    "performance": {"time": "O(n)", "space": "O(n)", "feedback": "Linear.", "analysis": "One dict."},
    "bestPractices": {"pros": ["Readable"], "cons": ["No type hints"], "details": "Fine."},
    "improvements": ["Add type hints"],
    "overallFeedback": "Solid solution.",
}


class FakeLLM:
    """Stands in for llm_client.complete_json; answers by token budget."""

    def __init__(self, resume_answer=None, error: Optional[Exception] = None):
        self.calls = []
        self.resume_answer = resume_answer
        self.error = error

    def __call__(self, messages, temperature=0.3, max_tokens=1000):
        self.calls.append({"messages": messages, "temperature": temperature, "max_tokens": max_tokens})
        if self.error is not None:
            raise self.error
        if max_tokens == 300:
            return dict(QUICK_REVIEW)
        if max_tokens == 1000:
            return dict(FULL_REVIEW)
        return self.resume_answer


@pytest.fixture
def fake_llm(monkeypatch):
    from algoprep.services import llm_client

    fake = FakeLLM()
    monkeypatch.setattr(llm_client, "complete_json", fake)
    return fake

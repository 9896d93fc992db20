from algoprep.services import review_service
from algoprep.services.review_cache import ReviewCache

from conftest import FakeLLM

PAYLOAD = {
    "problem": {
        "title": "Two Sum",
        "description": "Return indices of the two numbers that add up to target.",
        "constraints": ["2 <= nums.length <= 10^4", "Only one valid answer exists", "-10^9 <= nums[i] <= 10^9"],
        "expectedComplexity": {"time": "O(n)", "space": "O(n)"},
    },
    "submission": {
        "code": "def two_sum(nums, target):\n    seen = {}\n    for i, n in enumerate(nums):\n"
                "        if target - n in seen:\n            return [seen[target - n], i]\n        seen[n] = i",
        "language": "python",
    },
}


class Clock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


def test_review_returns_full_and_quick_review(client, fake_llm):
    res = client.post("/api/review", json=PAYLOAD)
    assert res.status_code == 200
    body = res.json()

    assert body["score"] == 85
    assert body["approach"]["rating"] == "good"
    assert body["performance"]["time"] == "O(n)"
    assert body["improvements"] == ["Add type hints"]
    assert body["quickReview"]["timeComplexity"] == "O(n^2)"
    assert body["submission"] == PAYLOAD["submission"]
    assert body["metadata"]["problemId"] == "two-sum"
    assert body["metadata"]["executionTime"] == "1s"
    assert body["metadata"]["timestamp"].endswith("Z")

    quick, full = fake_llm.calls
    assert (quick["temperature"], quick["max_tokens"]) == (0.3, 300)
    assert (full["temperature"], full["max_tokens"]) == (0.7, 1000)
    prompt = full["messages"][1]["content"]
    assert "Key constraints: 2 <= nums.length <= 10^4, Only one valid answer exists..." in prompt
    assert "Expected complexity: Time: O(n), Space: O(n)" in prompt


def test_identical_request_is_served_from_cache(client, fake_llm):
    first = client.post("/api/review", json=PAYLOAD)
    second = client.post("/api/review", json=PAYLOAD)

    assert second.content == first.content
    assert len(fake_llm.calls) == 2


def test_language_does_not_change_cache_key(client, fake_llm):
    client.post("/api/review", json=PAYLOAD)
    other = {**PAYLOAD, "submission": {**PAYLOAD["submission"], "language": "javascript"}}
    res = client.post("/api/review", json=other)

    assert res.json()["submission"]["language"] == "python"
    assert len(fake_llm.calls) == 2


def test_changed_code_is_reviewed_again(client, fake_llm):
    client.post("/api/review", json=PAYLOAD)
    other = {**PAYLOAD, "submission": {**PAYLOAD["submission"], "code": "pass"}}
    client.post("/api/review", json=other)
    assert len(fake_llm.calls) == 4


def test_expired_entry_is_regenerated(client, fake_llm, monkeypatch):
    clock = Clock()
    monkeypatch.setattr(review_service, "review_cache", ReviewCache(ttl_sec=1800, clock=clock))

    client.post("/api/review", json=PAYLOAD)
    clock.now += 1800
    client.post("/api/review", json=PAYLOAD)
    assert len(fake_llm.calls) == 4


def test_malformed_body(client, fake_llm):
    res = client.post("/api/review", json={"problem": {"title": "Two Sum"}})
    assert res.status_code == 400
    body = res.json()
    assert body["error"] == "Invalid request"
    assert body["details"]
    assert fake_llm.calls == []


def test_model_output_outside_schema(client, monkeypatch):
    def bad_output(messages, temperature=0.3, max_tokens=1000):
        return {"score": 150, "initialFeedback": "?", "timeComplexity": "", "spaceComplexity": ""}

    monkeypatch.setattr(review_service.llm_client, "complete_json", bad_output)
    res = client.post("/api/review", json=PAYLOAD)
    assert res.status_code == 500
    assert res.json() == {"error": "Failed to generate review"}


def test_failed_review_is_not_cached(client, monkeypatch, fresh_review_cache):
    monkeypatch.setattr(
        review_service.llm_client, "complete_json", FakeLLM(error=RuntimeError("timeout"))
    )
    res = client.post("/api/review", json=PAYLOAD)
    assert res.status_code == 500
    assert len(fresh_review_cache) == 0

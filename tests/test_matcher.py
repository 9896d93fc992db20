import random

from algoprep.services.interview.matcher import (
    Candidate,
    MatchRequest,
    MatchTier,
    match_problems,
    pick_count,
    select_problems,
)
from algoprep.services.interview.mock_problems import (
    build_mock_problems,
    mock_interview_id,
    pad_to_full_set,
    regenerate_mock_problems,
    topics_from_mock_id,
)


def cand(id, difficulty="medium", topics=(), patterns=()):
    return Candidate(
        id=id,
        title=f"Problem {id}",
        description="",
        difficulty=difficulty,
        topic_ids=frozenset(topics),
        pattern_ids=frozenset(patterns),
    )


def req(difficulty="medium", *topics):
    return MatchRequest(difficulty, frozenset(topics))


def ids(candidates):
    return [c.id for c in candidates]


def test_difficulty_and_topic_tier_wins_when_full():
    store = [
        cand("a1", "medium", ["arrays"]),
        cand("a2", "medium", ["arrays"]),
        cand("a3", "medium", ["arrays"]),
        cand("a4", "hard", ["arrays"]),
        cand("g1", "medium", ["graphs"]),
    ]
    assert ids(match_problems(req("medium", "arrays"), store)) == ["a1", "a2", "a3"]


def test_topic_tier_ignores_difficulty():
    store = [
        cand("a1", "medium", ["arrays"]),
        cand("a2", "hard", ["arrays"]),
        cand("a3", "easy", ["arrays"]),
        cand("g1", "medium", ["graphs"]),
    ]
    assert ids(match_problems(req("medium", "arrays"), store)) == ["a1", "a2", "a3"]


def test_shared_pattern_tier_extends_topic_matches():
    store = [
        cand("a1", "medium", ["arrays"], ["two_pointers"]),
        cand("s1", "easy", ["strings"], ["two_pointers"]),
        cand("s2", "easy", ["strings"], ["sliding_window"]),
    ]
    # a1 by topic, then s1 through the shared pattern; s2 shares nothing
    assert ids(match_problems(req("medium", "arrays"), store)) == ["a1", "s1"]


def test_shared_pattern_tier_skipped_when_topic_tier_is_full():
    store = [
        cand("a1", "hard", ["arrays"], ["two_pointers"]),
        cand("a2", "hard", ["arrays"]),
        cand("a3", "hard", ["arrays"]),
        cand("s1", "easy", ["strings"], ["two_pointers"]),
    ]
    assert ids(match_problems(req("medium", "arrays"), store)) == ["a1", "a2", "a3"]


def test_difficulty_tier_when_no_topic_matches():
    store = [
        cand("s1", "hard", ["strings"]),
        cand("s2", "easy", ["strings"]),
        cand("s3", "hard", ["strings"]),
    ]
    assert ids(match_problems(req("hard", "graphs"), store)) == ["s1", "s3"]


def test_first_five_as_last_resort():
    store = [cand(f"s{i}", "easy", ["strings"]) for i in range(7)]
    assert ids(match_problems(req("hard", "graphs"), store)) == ["s0", "s1", "s2", "s3", "s4"]


def test_empty_store_matches_nothing():
    assert match_problems(req("hard", "graphs"), []) == []


def test_tiers_are_pluggable():
    only_easy = (MatchTier("easy", 3, False, lambda r, s: [c for c in s if c.difficulty == "easy"]),)
    store = [cand("e1", "easy"), cand("m1", "medium")]
    assert ids(match_problems(req("medium", "arrays"), store, only_easy)) == ["e1"]


def test_full_pool_always_gives_three():
    pool = [cand(str(i)) for i in range(6)]
    for seed in range(20):
        picked = select_problems(pool, random.Random(seed))
        assert len(picked) == 3
        assert len(set(ids(picked))) == 3
        assert set(ids(picked)) <= set(ids(pool))


def test_small_pool_gives_between_one_and_pool_size():
    pool = [cand("a"), cand("b")]
    sizes = {len(select_problems(pool, random.Random(seed))) for seed in range(50)}
    assert sizes <= {1, 2}
    assert 1 in sizes


def test_pick_count_edges():
    rng = random.Random(0)
    assert pick_count(0, rng) == 0
    assert pick_count(1, rng) == 1
    assert pick_count(3, rng) == 3
    assert pick_count(10, rng) == 3


def test_mock_padding_completes_the_set():
    real = [{"id": "r1", "title": "Real", "description": "", "difficulty": "hard", "template": ""}]
    padded = pad_to_full_set(real, ["graphs"], "hard", ts=1700000000000)
    assert len(padded) == 3
    assert padded[0]["id"] == "r1"
    assert [q["id"] for q in padded[1:]] == ["mock-0-1700000000000", "mock-1-1700000000000"]
    assert padded[1]["title"] == "Number of Islands"
    # the graphs catalog has one entry, the next pass is a placeholder
    assert padded[2]["title"] == "Graphs Problem 2"
    assert all(q["difficulty"] == "hard" for q in padded[1:])


def test_mock_problems_cycle_topics():
    problems = build_mock_problems(["arrays", "dynamic_programming"], 3, "medium", ts=1)
    assert [p["title"] for p in problems] == ["Two Sum", "Dynamic Programming Problem 2", "Maximum Subarray"]
    assert problems[1]["description"].startswith("This is a mock medium difficulty problem for Dynamic Programming.")
    assert problems[1]["template"] == "def solve(input):\n    # Your solution here\n    pass"


def test_mock_problem_uses_store_topic_names():
    problems = build_mock_problems(["heaps"], 1, "easy", names={"heaps": "Heaps"}, ts=1)
    assert problems[0]["title"] == "Heaps Problem 1"


def test_mock_interview_id_round_trips_topics():
    mid = mock_interview_id(["arrays", "linked_lists"], ts=1700000000000)
    assert mid == "mock-interview-1700000000000-arrays-linked_lists"
    assert topics_from_mock_id(mid) == ["arrays", "linked_lists"]
    assert topics_from_mock_id("mock-interview-1700000000000") == []


def test_regenerated_problems_follow_topic_position():
    problems = regenerate_mock_problems(["strings", "arrays", "dynamic_programming", "graphs"], ts=5)
    assert [p["title"] for p in problems] == ["Valid Palindrome", "Maximum Subarray", "Dynamic Programming Problem 3"]
    assert [p["id"] for p in problems] == ["mock-0-5", "mock-1-5", "mock-2-5"]
    assert problems[2]["description"] == (
        "This is a mock problem for Dynamic Programming. Implement a solution that solves the problem efficiently."
    )
    assert all(p["difficulty"] == "medium" for p in problems)

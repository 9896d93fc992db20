def test_topics_sorted_by_name(client, seed_tags):
    res = client.get("/api/topics")
    assert res.status_code == 200
    assert [t["id"] for t in res.json()] == ["arrays", "graphs", "strings"]


def test_patterns_sorted_by_name(client, seed_tags):
    res = client.get("/api/patterns")
    assert res.status_code == 200
    assert [(p["id"], p["name"]) for p in res.json()] == [
        ("sliding_window", "Sliding Window"),
        ("two_pointers", "Two Pointers"),
    ]


def test_empty_taxonomy(client):
    assert client.get("/api/topics").json() == []
    assert client.get("/api/patterns").json() == []

"""End-to-end tests through the FastAPI app."""

QUESTION = "What should I focus on in my career?"


def _draw(client, spread_id="three-card", seed="api-seed"):
    resp = client.post("/reading/draw", json={"spread_id": spread_id, "seed": seed})
    assert resp.status_code == 200
    return resp.json()


def _interpret(client, cards, spread_id="three-card", question=QUESTION):
    return client.post("/reading/interpret", json={"question": question, "spread_id": spread_id, "cards": cards})


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


def test_deck_and_spreads(client):
    deck = client.get("/deck").json()
    assert deck["card_count"] == 78
    assert deck["cards"][0]["name"] == "The Fool"

    assert client.get("/deck/cards/The Tower").json()["card"]["arcana"] == "major"
    assert client.get("/deck/cards/The Jester").status_code == 404

    ids = [s["id"] for s in client.get("/spreads").json()["spreads"]]
    assert ids == ["single-card", "three-card", "celtic-cross", "relationship", "career-path"]

    spread = client.get("/spreads/celtic-cross").json()["spread"]
    assert len(spread["positions"]) == spread["layout"]["card_count"] == 10
    assert client.get("/spreads/nope").status_code == 404


def test_draw_is_seeded(client):
    first = _draw(client)
    again = _draw(client)

    assert first["seed"] == "api-seed"
    assert first["cards"] == again["cards"]
    assert [c["position"] for c in first["cards"]] == ["past", "present", "future"]
    assert len({c["name"] for c in first["cards"]}) == 3


def test_draw_without_seed_returns_one(client):
    body = client.post("/reading/draw", json={"spread_id": "single-card", "allow_reversed": False}).json()
    assert body["seed"]
    assert body["cards"][0]["orientation"] == "upright"


def test_unknown_spread_is_rejected(client):
    assert client.post("/reading/draw", json={"spread_id": "nope"}).status_code == 400

    cards = _draw(client)["cards"]
    assert _interpret(client, cards, spread_id="nope").status_code == 400


def test_interpret_validates_payload(client):
    cards = _draw(client)["cards"]
    assert _interpret(client, cards, question="").status_code == 422
    assert _interpret(client, []).status_code == 422


def test_interpret_and_session_reset(client):
    cards = _draw(client)["cards"]

    first = _interpret(client, cards)
    assert first.status_code == 200
    body = first.json()
    assert body["introduction"].startswith("Your professional journey")
    assert [c["name"] for c in body["cards"]] == [c["name"] for c in cards]
    assert len(body["reflection_questions"]) == 5

    assert _interpret(client, cards).json()["id"] == body["id"]

    assert client.post("/reading/session/reset").json() == {"ok": True}
    assert _interpret(client, cards).json()["id"] != body["id"]


def test_reading_lifecycle(client):
    cards = _draw(client)["cards"]
    interpretation = _interpret(client, cards).json()

    resp = client.post("/reading", json={
        "user_id": "user-1",
        "question": QUESTION,
        "spread_id": "three-card",
        "cards": cards,
        "interpretation": interpretation,
    })
    assert resp.status_code == 201
    reading_id = resp.json()["id"]

    fetched = client.get(f"/reading/{reading_id}").json()
    assert fetched["interpretation"] == interpretation
    assert fetched["reading_data"] == cards
    assert fetched["spread_type"] == "three-card"

    listing = client.get("/readings", params={"user_id": "user-1"}).json()
    assert listing["count"] == 1
    assert listing["readings"][0]["id"] == reading_id
    assert client.get("/readings", params={"user_id": "user-1", "limit": 0}).status_code == 400

    assert client.delete(f"/reading/{reading_id}").json() == {"ok": True}
    assert client.get(f"/reading/{reading_id}").status_code == 404
    assert client.delete(f"/reading/{reading_id}").status_code == 404


def test_journal_lifecycle(client):
    cards = _draw(client)["cards"]
    reading_id = client.post("/reading", json={
        "user_id": "user-1", "question": QUESTION, "spread_id": "three-card", "cards": cards,
    }).json()["id"]

    resp = client.post("/journal", json={
        "user_id": "user-1",
        "title": "Career thoughts",
        "content": "The cards pointed to patience.",
        "mood": "Reflective",
        "reading_id": reading_id,
        "tags": ["career", "tarot"],
    })
    assert resp.status_code == 201
    entry = resp.json()

    patched = client.patch(f"/journal/{entry['id']}", json={"mood": "Inspired", "tags": ["career"]}).json()
    assert patched["mood"] == "Inspired"
    assert patched["title"] == "Career thoughts"
    assert patched["tags"] == ["career"]
    assert client.get(f"/journal/{entry['id']}").json() == patched

    listing = client.get("/journals", params={"user_id": "user-1", "tags": ["career"], "search": "patience"}).json()
    assert listing["count"] == 1
    assert client.get("/journals", params={"user_id": "user-1", "mood": "Happy"}).json()["count"] == 0
    assert client.get("/journals", params={"user_id": "user-1", "sort_field": "mood"}).status_code == 400
    assert client.get("/journal-tags", params={"user_id": "user-1"}).json() == {"tags": ["career"]}

    client.delete(f"/reading/{reading_id}")
    assert client.get(f"/journal/{entry['id']}").json()["reading_id"] is None

    assert client.delete(f"/journal/{entry['id']}").json() == {"ok": True}
    assert client.get(f"/journal/{entry['id']}").status_code == 404
    assert client.patch(f"/journal/{entry['id']}", json={"title": "x"}).status_code == 404


def test_journal_errors(client):
    missing_reading = client.post("/journal", json={"user_id": "user-1", "title": "x", "reading_id": "missing"})
    assert missing_reading.status_code == 400

    assert client.post("/journal", json={"user_id": "user-1", "title": "x", "mood": "Furious"}).status_code == 422
    assert client.post("/journal", json={"user_id": "user-1", "title": ""}).status_code == 422

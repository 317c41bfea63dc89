from felma import config

RATINGS = {"customerImpact": 5, "teamEnergy": 9, "frequency": 5, "ease": 3}


def _create(client, **overrides):
    body = {"content": "Printer keeps jamming", "item_type": "frustration"}
    body.update(overrides)
    return client.post("/api/items", json=body)


def test_root_and_health(client):
    assert client.get("/").data == b"Felma backend OK"
    health = client.get("/health").get_json()
    assert health["status"] == "healthy"
    assert health["store"] == "memory"


def test_create_returns_201(client):
    response = _create(client, user_id="u1", title="Printer")
    assert response.status_code == 201
    item = response.get_json()
    assert item["id"] == 1
    assert item["title"] == "Printer"
    assert item["stage"] == "capture"


def test_create_aliases(client):
    for path in ["/api/item", "/api/create"]:
        response = client.post(path, json={"content": "x", "item_type": "idea"})
        assert response.status_code == 201


def test_create_requires_content_and_type(client):
    assert _create(client, content="   ").status_code == 400
    response = _create(client, item_type="complaint")
    assert response.status_code == 400
    assert "item_type" in response.get_json()["error"]
    assert client.post("/api/items", data="not json").status_code == 400


def test_create_with_ratings(client):
    item = _create(client, **RATINGS).get_json()
    assert item["priority_rank"] == 28
    assert item["leader_to_unblock"] is True


def test_list_sorted_by_rank(client):
    _create(client, content="unrated")
    _create(client, content="rated", customerImpact=10, teamEnergy=10, frequency=10, ease=10)
    items = client.get("/api/list").get_json()
    assert [item["content"] for item in items] == ["rated", "unrated"]


def test_list_by_org_and_recent(client):
    _create(client, content="acme", org_id="ACME")
    _create(client, content="other", org="OTHER")
    items = client.get("/api/list?org=OTHER&sort=recent").get_json()
    assert [item["content"] for item in items] == ["other"]


def test_list_rejects_unknown_sort(client):
    assert client.get("/api/list?sort=title").status_code == 400


def test_update_ratings(client):
    item_id = _create(client).get_json()["id"]
    response = client.patch(f"/api/items/{item_id}/ratings", json={
        "customerImpact": 8, "teamEnergy": 8, "frequency": 9, "ease": 9,
    })
    assert response.status_code == 200
    item = response.get_json()
    assert item["priority_rank"] == 72
    assert item["action_tier"] == "Make it happen"
    assert item["leader_to_unblock"] is False
    assert client.get(f"/api/items/{item_id}").get_json()["priority_rank"] == 72


def test_update_ratings_rejects_out_of_range(client):
    item_id = _create(client).get_json()["id"]
    response = client.patch(f"/api/items/{item_id}/ratings", json=dict(RATINGS, teamEnergy=11))
    assert response.status_code == 400
    body = response.get_json()
    assert body["error"] == "validation_error"
    assert body["fields"] == ["teamEnergy"]


def test_update_ratings_unknown_item(client):
    response = client.patch("/api/items/42/ratings", json=RATINGS)
    assert response.status_code == 404
    assert response.get_json()["error"] == "item_not_found"


def test_advance(client):
    item_id = _create(client).get_json()["id"]
    item = client.post(f"/api/items/{item_id}/advance", json={"note": "Logged"}).get_json()
    assert item["stage"] == "clarify"
    assert item["capture_note"] == "Logged"

    response = client.post(f"/api/items/{item_id}/advance", json={"stage": "capture"})
    assert response.status_code == 409
    assert response.get_json()["error"] == "stage_error"


def test_rank_endpoint(client):
    response = client.post("/api/rank", json={"customerImpact": 10, "teamEnergy": 10, "frequency": 10, "ease": 10})
    assert response.get_json() == {"priority_rank": 100, "action_tier": "Make it happen", "leader_to_unblock": False}

    response = client.post("/api/rank", json={"customerImpact": 10})
    assert response.status_code == 400
    assert response.get_json()["fields"] == ["teamEnergy", "frequency", "ease"]


def test_store_failure_is_reported_separately(client, monkeypatch):
    monkeypatch.setattr(config, "SUPABASE_URL", "https://felma.supabase.co")
    monkeypatch.setattr(config, "SUPABASE_SERVICE_KEY", "service-key")

    import httpx
    from felma import supabase

    def unreachable(*args, **kwargs):
        raise httpx.ConnectError("no route")

    monkeypatch.setattr(supabase.httpx, "request", unreachable)

    response = client.get("/api/list")
    assert response.status_code == 502
    assert response.get_json()["error"] == "storage_error"


def test_cors_allows_configured_origin(client):
    response = client.get("/api/list", headers={"Origin": config.CORS_ORIGIN})
    assert response.headers["Access-Control-Allow-Origin"] == config.CORS_ORIGIN


def test_array_body_on_rank_is_a_validation_error(client):
    response = client.post("/api/rank", json=[1, 2, 3, 4])
    assert response.status_code == 400
    assert response.get_json()["fields"] == ["customerImpact", "teamEnergy", "frequency", "ease"]


def test_array_body_on_create_is_rejected(client):
    response = client.post("/api/items", json=["x"])
    assert response.status_code == 400
    assert response.get_json() == {"error": "content required"}


def test_non_object_bodies_on_item_routes(client):
    item_id = _create(client).get_json()["id"]
    assert client.patch(f"/api/items/{item_id}/ratings", json="8").status_code == 400
    # An empty body just moves to the next stage
    item = client.post(f"/api/items/{item_id}/advance", json=[]).get_json()
    assert item["stage"] == "clarify"

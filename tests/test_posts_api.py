def test_list_empty_store_returns_empty_array(client):
    r = client.get("/api/posts")
    assert r.status_code == 200
    assert r.json() == []


def test_create_echoes_fields_with_positive_id(client):
    r = client.post("/api/posts", json={"title": "A", "content": "B"})
    assert r.status_code == 201
    body = r.json()
    assert body["id"] > 0
    assert body["title"] == "A"
    assert body["content"] == "B"


def test_get_after_create_matches_created(client):
    fields = {"title": "Hello", "content": "World", "image_location": "/api/uploads/x.png", "image_id": "img-1"}
    created = client.post("/api/posts", json=fields).json()

    r = client.get(f"/api/posts/{created['id']}")
    assert r.status_code == 200
    post = r.json()
    for key, value in fields.items():
        assert post[key] == value
    assert post["id"] == created["id"]
    assert post["views"] == 0
    assert post["created_at"]


def test_create_update_delete_scenario(client):
    created = client.post("/api/posts", json={"title": "A", "content": "B"}).json()
    assert created == {"id": 1, "title": "A", "content": "B"}

    r = client.put("/api/posts/1", json={"title": "A2"})
    assert r.status_code == 200
    assert r.json()["title"] == "A2"
    assert r.json()["content"] == "B"

    r = client.delete("/api/posts/1")
    assert r.status_code == 200
    assert r.json() == {"message": "Post deleted successfully"}

    r = client.get("/api/posts/1")
    assert r.status_code == 404
    assert r.json()["message"] == "Post not found"


def test_update_changes_only_given_fields(client):
    created = client.post("/api/posts", json={"title": "T", "content": "C", "views": 7}).json()
    before = client.get(f"/api/posts/{created['id']}").json()

    client.put(f"/api/posts/{created['id']}", json={"content": "C2"})
    after = client.get(f"/api/posts/{created['id']}").json()

    assert after["content"] == "C2"
    assert {k: v for k, v in after.items() if k != "content"} == {
        k: v for k, v in before.items() if k != "content"
    }


def test_list_returns_all_posts(client):
    client.post("/api/posts", json={"title": "one"})
    client.post("/api/posts", json={"title": "two"})
    titles = sorted(p["title"] for p in client.get("/api/posts").json())
    assert titles == ["one", "two"]


def test_unknown_field_is_rejected(client):
    r = client.post("/api/posts", json={"title": "x", "author; DROP TABLE posts": "y"})
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid post data"
    assert client.get("/api/posts").json() == []


def test_server_columns_are_not_writable(client):
    created = client.post("/api/posts", json={"title": "x"}).json()
    r = client.put(f"/api/posts/{created['id']}", json={"id": 99})
    assert r.status_code == 400
    r = client.post("/api/posts", json={"created_at": "2020-01-01"})
    assert r.status_code == 400


def test_empty_or_non_object_body_is_rejected(client):
    assert client.post("/api/posts", json={}).status_code == 400
    assert client.post("/api/posts", json=[1, 2]).status_code == 400
    assert client.post("/api/posts").status_code == 400


def test_malformed_json_is_rejected(client):
    r = client.post(
        "/api/posts",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid request body"


def test_wrong_value_type_is_rejected(client):
    r = client.post("/api/posts", json={"title": "x", "views": "many"})
    assert r.status_code == 400


def test_malformed_id_is_rejected(client):
    for bad in ("abc", "0", "-3", "1.5"):
        assert client.get(f"/api/posts/{bad}").status_code == 400
        assert client.delete(f"/api/posts/{bad}").status_code == 400


def test_update_missing_post_is_not_found(client):
    r = client.put("/api/posts/42", json={"title": "nope"})
    assert r.status_code == 404


def test_delete_missing_post_still_succeeds(client):
    r = client.delete("/api/posts/42")
    assert r.status_code == 200
    assert r.json() == {"message": "Post deleted successfully"}


def test_duplicate_image_id_is_rejected(client):
    assert client.post("/api/posts", json={"title": "a", "image_id": "same"}).status_code == 201
    r = client.post("/api/posts", json={"title": "b", "image_id": "same"})
    assert r.status_code == 400


def test_null_views_is_rejected(client):
    r = client.post("/api/posts", json={"title": "t", "views": None})
    assert r.status_code == 400
    assert client.get("/api/posts").json() == []

    created = client.post("/api/posts", json={"title": "t"}).json()
    r = client.put(f"/api/posts/{created['id']}", json={"views": None})
    assert r.status_code == 400
    assert client.get(f"/api/posts/{created['id']}").json()["views"] == 0

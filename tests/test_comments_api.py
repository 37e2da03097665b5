import pytest


@pytest.fixture
def post_id(client):
    return client.post("/api/posts", json={"title": "with comments"}).json()["id"]


def test_add_and_list_comments(client, post_id):
    r = client.post(f"/api/comments/{post_id}", json={"author": "Jane", "content": "Nice!"})
    assert r.status_code == 201
    comment = r.json()
    assert comment["id"] > 0
    assert comment["post_id"] == post_id
    assert comment["author"] == "Jane"

    r = client.get(f"/api/comments/{post_id}")
    assert r.status_code == 200
    assert [c["content"] for c in r.json()] == ["Nice!"]


def test_remove_comment_by_query_param(client, post_id):
    first = client.post(f"/api/comments/{post_id}", json={"content": "one"}).json()
    client.post(f"/api/comments/{post_id}", json={"content": "two"})

    r = client.delete(f"/api/comments/{post_id}", params={"commentId": first["id"]})
    assert r.status_code == 204
    assert [c["content"] for c in client.get(f"/api/comments/{post_id}").json()] == ["two"]

    # 이미 지운 댓글도 204
    r = client.delete(f"/api/comments/{post_id}", params={"commentId": first["id"]})
    assert r.status_code == 204


def test_comment_routes_require_existing_post(client):
    assert client.get("/api/comments/999").status_code == 404
    assert client.post("/api/comments/999", json={"content": "x"}).status_code == 404
    assert client.delete("/api/comments/999", params={"commentId": 1}).status_code == 404


def test_comment_rejects_unknown_fields(client, post_id):
    r = client.post(f"/api/comments/{post_id}", json={"content": "x", "post_id": 5})
    assert r.status_code == 400


def test_remove_without_comment_id_is_rejected(client, post_id):
    assert client.delete(f"/api/comments/{post_id}").status_code == 400

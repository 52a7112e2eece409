"""
tests/test_routers_articles.py -- Tests for api/http/articles.py

Covers: GET one/all, POST, PUT, PATCH, DELETE over /api/articles,
including auth, validation, type-mismatch and cache header behavior.
"""

from unittest.mock import patch


# ── GET ──────────────────────────────────────────────────────────────


def test_get_article_by_id(client, add_node):
    """Existing article -> 200 with its fields."""
    nid = add_node(title="Hello", body="<p>World</p>")
    resp = client.get(f"/api/articles/{nid}")
    assert resp.status_code == 200
    data = resp.json()
    assert data["id"] == nid
    assert data["type"] == "article"
    assert data["title"] == "Hello"
    assert data["body"] == {"value": "<p>World</p>", "format": "basic_html"}
    assert data["status"] == 1


def test_get_non_article_is_forbidden(client, add_node):
    """Node of another type -> 403, not 404."""
    nid = add_node(type="page", title="About us")
    resp = client.get(f"/api/articles/{nid}")
    assert resp.status_code == 403


def test_get_missing_id_is_forbidden(client):
    resp = client.get("/api/articles/999")
    assert resp.status_code == 403


def test_get_unpublished_article_anonymous_forbidden(client, add_node):
    nid = add_node(status=0)
    resp = client.get(f"/api/articles/{nid}")
    assert resp.status_code == 403


def test_get_unpublished_article_authenticated(client, add_node, auth_headers):
    nid = add_node(status=0)
    resp = client.get(f"/api/articles/{nid}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["status"] == 0


def test_list_articles_only_articles(client, add_node):
    """Collection skips nodes of other types and keeps id order."""
    first = add_node(title="One")
    add_node(type="page", title="Page")
    second = add_node(title="Two")

    resp = client.get("/api/articles")
    assert resp.status_code == 200
    assert [a["id"] for a in resp.json()] == [first, second]


def test_list_articles_empty(client, add_node):
    add_node(type="page")
    resp = client.get("/api/articles")
    assert resp.status_code == 200
    assert resp.json() == []


def test_list_hides_unpublished_from_anonymous(client, add_node, auth_headers):
    published = add_node(title="Live")
    draft = add_node(title="Draft", status=0)

    anon = client.get("/api/articles").json()
    assert [a["id"] for a in anon] == [published]

    authed = client.get("/api/articles", headers=auth_headers).json()
    assert [a["id"] for a in authed] == [published, draft]


def test_get_sets_cache_headers(client, add_node):
    nid = add_node()
    resp = client.get(f"/api/articles/{nid}")
    assert resp.headers["X-Cache-Contexts"] == "url.path user.roles"
    assert resp.headers["X-Cache-Tags"] == f"node:{nid}"
    assert resp.headers["Vary"] == "Authorization"


def test_list_sets_cache_headers(client, add_node):
    nid = add_node()
    resp = client.get("/api/articles")
    assert resp.headers["X-Cache-Contexts"] == "url.path user.roles"
    assert resp.headers["X-Cache-Tags"] == f"node:{nid} node_list"


def test_empty_list_still_has_cache_contexts(client):
    resp = client.get("/api/articles")
    assert resp.headers["X-Cache-Contexts"] == "url.path user.roles"
    assert resp.headers["X-Cache-Tags"] == "node_list"


# ── POST ─────────────────────────────────────────────────────────────


def test_create_article(client, auth_headers, editor):
    """Valid body -> 201 with persisted node."""
    resp = client.post("/api/articles", json={"title": "New", "body": "Text"}, headers=auth_headers)
    assert resp.status_code == 201
    data = resp.json()
    assert data["id"] > 0
    assert data["type"] == "article"
    assert data["title"] == "New"
    assert data["body"] == {"value": "Text", "format": "basic_html"}
    assert data["status"] == 1
    assert data["owner_id"] == editor.id

    fetched = client.get(f"/api/articles/{data['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["title"] == "New"


def test_create_requires_authentication(client, count_nodes):
    resp = client.post("/api/articles", json={"title": "New", "body": "Text"})
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Authentication required."
    assert count_nodes() == 0


def test_create_missing_title(client, auth_headers, count_nodes):
    resp = client.post("/api/articles", json={"body": "Text"}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Title and body are required."
    assert count_nodes() == 0


def test_create_missing_body(client, auth_headers):
    resp = client.post("/api/articles", json={"title": "New"}, headers=auth_headers)
    assert resp.status_code == 400


def test_create_blank_fields(client, auth_headers):
    resp = client.post("/api/articles", json={"title": "  ", "body": ""}, headers=auth_headers)
    assert resp.status_code == 400


def test_create_rejects_non_json_content_type(client, auth_headers):
    resp = client.post(
        "/api/articles",
        content="title=New&body=Text",
        headers={**auth_headers, "Content-Type": "application/x-www-form-urlencoded"},
    )
    assert resp.status_code == 400
    assert "application/json" in resp.json()["detail"]


def test_create_rejects_malformed_json(client, auth_headers):
    resp = client.post(
        "/api/articles",
        content="{not json",
        headers={**auth_headers, "Content-Type": "application/json"},
    )
    assert resp.status_code == 400


def test_create_rejects_json_array(client, auth_headers):
    resp = client.post("/api/articles", json=["title", "body"], headers=auth_headers)
    assert resp.status_code == 400


def test_create_rejects_wrong_field_type(client, auth_headers):
    resp = client.post("/api/articles", json={"title": 5, "body": "Text"}, headers=auth_headers)
    assert resp.status_code == 400
    assert "title" in resp.json()["detail"]


def test_invalid_token_is_unauthorized(client):
    resp = client.post(
        "/api/articles",
        json={"title": "New", "body": "Text"},
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert resp.status_code == 401


# ── PUT / PATCH ──────────────────────────────────────────────────────


def test_put_replaces_title_and_body(client, add_node, auth_headers):
    nid = add_node(title="Old", body="Old body")
    resp = client.put(f"/api/articles/{nid}", json={"title": "New", "body": "New body"}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["title"] == "New"
    assert resp.json()["body"]["value"] == "New body"

    fetched = client.get(f"/api/articles/{nid}").json()
    assert fetched["title"] == "New"
    assert fetched["body"]["value"] == "New body"


def test_put_requires_both_fields(client, add_node, auth_headers):
    nid = add_node(title="Old", body="Old body")
    resp = client.put(f"/api/articles/{nid}", json={"title": "New"}, headers=auth_headers)
    assert resp.status_code == 400
    assert client.get(f"/api/articles/{nid}").json()["title"] == "Old"


def test_patch_updates_only_given_fields(client, add_node, auth_headers):
    nid = add_node(title="Old", body="Old body")
    resp = client.patch(f"/api/articles/{nid}", json={"title": "Renamed"}, headers=auth_headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["title"] == "Renamed"
    assert data["body"]["value"] == "Old body"


def test_patch_ignores_empty_values(client, add_node, auth_headers):
    nid = add_node(title="Old", body="Old body")
    resp = client.patch(f"/api/articles/{nid}", json={"title": "", "body": "Fresh"}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["title"] == "Old"
    assert resp.json()["body"]["value"] == "Fresh"


def test_write_on_non_article_is_not_found(client, add_node, auth_headers):
    nid = add_node(type="page", title="About")
    payload = {"title": "x", "body": "y"}
    assert client.put(f"/api/articles/{nid}", json=payload, headers=auth_headers).status_code == 404
    assert client.patch(f"/api/articles/{nid}", json=payload, headers=auth_headers).status_code == 404
    assert client.delete(f"/api/articles/{nid}", headers=auth_headers).status_code == 404


def test_write_on_missing_id_is_not_found(client, auth_headers):
    payload = {"title": "x", "body": "y"}
    resp = client.put("/api/articles/999", json=payload, headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Article not found."
    assert client.patch("/api/articles/999", json=payload, headers=auth_headers).status_code == 404
    assert client.delete("/api/articles/999", headers=auth_headers).status_code == 404


def test_anonymous_writes_do_not_touch_storage(client, add_node):
    """Unauthenticated PUT/PATCH/DELETE -> 403 before any load."""
    nid = add_node()
    with patch("app.domains.articles.services.ArticleRepository.load") as mock_load:
        assert client.put(f"/api/articles/{nid}", json={"title": "x", "body": "y"}).status_code == 403
        assert client.patch(f"/api/articles/{nid}", json={"title": "x"}).status_code == 403
        assert client.delete(f"/api/articles/{nid}").status_code == 403
        mock_load.assert_not_called()


# ── DELETE ───────────────────────────────────────────────────────────


def test_delete_article(client, add_node, auth_headers, count_nodes):
    nid = add_node()
    resp = client.delete(f"/api/articles/{nid}", headers=auth_headers)
    assert resp.status_code == 204
    assert resp.content == b""
    assert count_nodes() == 0
    assert client.get(f"/api/articles/{nid}").status_code == 403


def test_delete_leaves_other_nodes(client, add_node, auth_headers, count_nodes):
    nid = add_node()
    add_node(type="page")
    add_node(title="Other article")
    assert client.delete(f"/api/articles/{nid}", headers=auth_headers).status_code == 204
    assert count_nodes() == 2


# ── Id handling ──────────────────────────────────────────────────────


def test_get_id_beyond_integer_range_is_forbidden(client):
    """Ids the column cannot hold behave like missing nodes."""
    assert client.get(f"/api/articles/{2**63}").status_code == 403
    assert client.get(f"/api/articles/{2**31}").status_code == 403


def test_get_non_numeric_id_is_forbidden(client):
    assert client.get("/api/articles/abc").status_code == 403
    assert client.get("/api/articles/-1").status_code == 403


def test_write_on_unstorable_id_is_not_found(client, auth_headers):
    payload = {"title": "x", "body": "y"}
    for article_id in (str(2**63), "abc"):
        assert client.put(f"/api/articles/{article_id}", json=payload, headers=auth_headers).status_code == 404
        assert client.patch(f"/api/articles/{article_id}", json=payload, headers=auth_headers).status_code == 404
        assert client.delete(f"/api/articles/{article_id}", headers=auth_headers).status_code == 404


def test_missing_id_checked_before_body(client, auth_headers):
    """PUT/PATCH to a missing id -> 404 even when the body is unusable."""
    headers = {**auth_headers, "Content-Type": "text/plain"}
    resp = client.put("/api/articles/999", content="not json", headers=headers)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Article not found."
    assert client.patch("/api/articles/999", content="not json", headers=headers).status_code == 404


def test_existing_article_with_bad_body_is_bad_request(client, add_node, auth_headers):
    nid = add_node(title="Old")
    headers = {**auth_headers, "Content-Type": "text/plain"}
    assert client.put(f"/api/articles/{nid}", content="not json", headers=headers).status_code == 400
    assert client.get(f"/api/articles/{nid}").json()["title"] == "Old"

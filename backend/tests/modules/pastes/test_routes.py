"""Tests for the paste endpoints."""

import pytest


@pytest.fixture
def bob_headers(register):
    return register("bob")


def create_paste(client, headers=None, **fields):
    fields.setdefault("content", "print('hello')")
    response = client.post("/api/paste", json=fields, headers=headers or {})
    assert response.status_code == 201, response.text
    return response.json()


class TestCreatePaste:
    def test_anonymous_create(self, client):
        response = client.post("/api/paste", json={"content": "hello", "title": "Greeting"})

        assert response.status_code == 201
        data = response.json()
        assert len(data["id"]) == 8
        assert data["title"] == "Greeting"
        assert data["views"] == 0
        assert data["is_public"] is True
        assert data["owner"] == {"kind": "anonymous"}

    def test_authenticated_create(self, client, auth_headers):
        data = create_paste(client, auth_headers)
        assert data["owner"] == {"kind": "user", "user_id": 1}

    def test_missing_content(self, client):
        response = client.post("/api/paste", json={"title": "empty"})

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    def test_empty_content(self, client):
        response = client.post("/api/paste", json={"content": ""})
        assert response.status_code == 400

    def test_unknown_expires_in(self, client):
        response = client.post("/api/paste", json={"content": "x", "expires_in": "2h"})

        assert response.status_code == 400
        assert "expires_in" in response.json()["message"]

    def test_empty_expires_in_means_never(self, client):
        data = create_paste(client, expires_in="")
        assert data["expires_at"] is None

    def test_expires_in_sets_expiry(self, client):
        data = create_paste(client, expires_in="1h")
        assert data["expires_at"] is not None

    def test_invalid_token_creates_anonymous_paste(self, client):
        data = create_paste(client, {"Authorization": "Bearer garbage"})
        assert data["owner"] == {"kind": "anonymous"}


class TestGetPaste:
    def test_read(self, client):
        created = create_paste(client, content="a\nb\nc", language="python")

        response = client.get(f"/api/paste/{created['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["content"] == "a\nb\nc"
        assert data["views"] == 1
        assert data["line_count"] == 3
        assert data["display_language"] == "python"

    def test_read_includes_author(self, client, auth_headers):
        created = create_paste(client, auth_headers)

        data = client.get(f"/api/paste/{created['id']}").json()

        assert data["user"]["id"] == 1
        assert data["user"]["username"] == "alice"
        assert "password_hash" not in data["user"]

    def test_anonymous_paste_has_no_author(self, client):
        created = create_paste(client)

        data = client.get(f"/api/paste/{created['id']}").json()

        assert data["user"] is None

    def test_extension_sets_display_language(self, client):
        created = create_paste(client, language="python")

        data = client.get(f"/api/paste/{created['id']}.rs").json()

        assert data["id"] == created["id"]
        assert data["display_language"] == "rust"
        assert data["language"] == "python"

    def test_plaintext_fallback(self, client):
        created = create_paste(client)
        data = client.get(f"/api/paste/{created['id']}").json()
        assert data["display_language"] == "plaintext"

    def test_not_found(self, client):
        response = client.get("/api/paste/deadbeef")

        assert response.status_code == 404
        assert response.json()["error"] == "PASTE_NOT_FOUND"

    def test_burn_after_read(self, client):
        created = create_paste(client, burn_after_read=True)

        assert client.get(f"/api/paste/{created['id']}").status_code == 200
        assert client.get(f"/api/paste/{created['id']}").status_code == 404

    def test_private_paste(self, client, auth_headers, bob_headers):
        created = create_paste(client, auth_headers, is_public=False)
        url = f"/api/paste/{created['id']}"

        anonymous = client.get(url)
        assert anonymous.status_code == 403
        assert anonymous.json()["message"] == "This paste is private"

        assert client.get(url, headers=bob_headers).status_code == 403
        assert client.get(url, headers=auth_headers).status_code == 200


class TestRawPaste:
    def test_raw(self, client):
        created = create_paste(client, content="plain text")

        response = client.get(f"/api/paste/{created['id']}/raw")

        assert response.status_code == 200
        assert response.text == "plain text"
        assert response.headers["content-type"].startswith("text/plain")

    def test_short_raw_url(self, client):
        created = create_paste(client, content="plain text")

        response = client.get(f"/{created['id']}.txt/raw")

        assert response.status_code == 200
        assert response.text == "plain text"

    def test_raw_does_not_burn_or_count(self, client):
        created = create_paste(client, burn_after_read=True)

        assert client.get(f"/api/paste/{created['id']}/raw").status_code == 200
        assert client.get(f"/{created['id']}/raw").status_code == 200

        data = client.get(f"/api/paste/{created['id']}").json()
        assert data["views"] == 1

    def test_raw_private(self, client, auth_headers):
        created = create_paste(client, auth_headers, is_public=False)

        assert client.get(f"/api/paste/{created['id']}/raw").status_code == 403
        assert client.get(f"/api/paste/{created['id']}/raw", headers=auth_headers).status_code == 200

    def test_raw_missing(self, client):
        response = client.get("/deadbeef/raw")
        assert response.status_code == 404
        assert response.json()["error"] == "PASTE_NOT_FOUND"


class TestUpdatePaste:
    def test_owner_update(self, client, auth_headers):
        created = create_paste(client, auth_headers, title="Old")

        response = client.put(
            f"/api/paste/{created['id']}",
            json={"title": "New", "is_public": False},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["title"] == "New"
        assert response.json()["is_public"] is False

    def test_empty_title_is_ignored(self, client, auth_headers):
        created = create_paste(client, auth_headers, title="Keep")

        response = client.put(
            f"/api/paste/{created['id']}.py",
            json={"title": ""},
            headers=auth_headers,
        )

        assert response.json()["title"] == "Keep"

    def test_unauthenticated(self, client, auth_headers):
        created = create_paste(client, auth_headers)

        response = client.put(f"/api/paste/{created['id']}", json={"title": "x"})

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_non_owner(self, client, auth_headers, bob_headers):
        created = create_paste(client, auth_headers)

        response = client.put(
            f"/api/paste/{created['id']}", json={"title": "x"}, headers=bob_headers
        )

        assert response.status_code == 403
        assert response.json()["message"] == "You can only edit your own pastes"

    def test_anonymous_paste_cannot_be_edited(self, client, auth_headers):
        created = create_paste(client)

        response = client.put(
            f"/api/paste/{created['id']}", json={"title": "x"}, headers=auth_headers
        )

        assert response.status_code == 403

    def test_missing(self, client, auth_headers):
        response = client.put("/api/paste/deadbeef", json={"title": "x"}, headers=auth_headers)
        assert response.status_code == 404


class TestDeletePaste:
    def test_owner_delete(self, client, auth_headers):
        created = create_paste(client, auth_headers)

        response = client.delete(f"/api/paste/{created['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Paste deleted successfully"}
        assert client.get(f"/api/paste/{created['id']}").status_code == 404

    def test_unauthenticated(self, client, auth_headers):
        created = create_paste(client, auth_headers)
        assert client.delete(f"/api/paste/{created['id']}").status_code == 401

    def test_non_owner(self, client, auth_headers, bob_headers):
        created = create_paste(client, auth_headers)

        response = client.delete(f"/api/paste/{created['id']}", headers=bob_headers)

        assert response.status_code == 403
        assert response.json()["message"] == "You can only delete your own pastes"


class TestForkPaste:
    def test_fork(self, client, auth_headers, bob_headers):
        source = create_paste(client, auth_headers, title="Source", language="go")

        response = client.post(f"/api/paste/{source['id']}/fork", headers=bob_headers)

        assert response.status_code == 201
        fork = response.json()
        assert fork["id"] != source["id"]
        assert fork["title"] == "Source (Fork)"
        assert fork["content"] == source["content"]
        assert fork["is_public"] is True
        assert fork["owner"] == {"kind": "user", "user_id": 2}

    def test_anonymous_fork(self, client):
        source = create_paste(client)

        fork = client.post(f"/api/paste/{source['id']}/fork").json()

        assert fork["title"] == "(Fork)"
        assert fork["owner"] == {"kind": "anonymous"}

    def test_fork_private(self, client, auth_headers):
        source = create_paste(client, auth_headers, is_public=False)

        response = client.post(f"/api/paste/{source['id']}/fork")

        assert response.status_code == 403
        assert response.json()["message"] == "Cannot fork a private paste"

    def test_fork_missing(self, client):
        assert client.post("/api/paste/deadbeef/fork").status_code == 404


class TestRecent:
    def test_recent_lists_public_pastes(self, client, auth_headers):
        public = create_paste(client, title="public")
        create_paste(client, auth_headers, is_public=False)

        response = client.get("/api/pastes/recent")

        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [public["id"]]

    def test_recent_is_capped_at_twenty(self, client):
        for _ in range(25):
            create_paste(client)

        assert len(client.get("/api/pastes/recent").json()) == 20

    def test_recent_includes_authors(self, client, auth_headers):
        create_paste(client, title="anonymous")
        create_paste(client, auth_headers, title="alice's")

        recent = client.get("/api/pastes/recent").json()

        authors = {p["title"]: p["user"] for p in recent}
        assert authors["alice's"]["username"] == "alice"
        assert authors["anonymous"] is None

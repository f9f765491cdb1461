"""
Integration tests for blogs, collections, the reading list and the profile.
"""


def _post(client, headers, path, data):
    return client.post(f"/api{path}", json={"data": data}, headers=headers)


def _patch(client, headers, path, data):
    return client.patch(f"/api{path}", json={"data": data}, headers=headers)


def _blog(client, headers, **data):
    payload = {"title": "Reading log", "content": "Thoughts", "spoilerAlert": False}
    response = _post(client, headers, "/blogs", {**payload, **data})
    assert response.status_code == 201, response.json()
    return response.json()["data"]["blog"]


def _collection(client, headers, **data):
    response = _post(client, headers, "/collections", {"title": "Favourites", **data})
    assert response.status_code == 201, response.json()
    return response.json()["data"]["collection"]


# ===== Blogs =====


def test_blog_crud(client, auth_headers, alice, bob):
    blog = _blog(client, auth_headers("alice"), genres=["poetry"])
    assert blog["visibility"] == "public"
    assert blog["user"]["username"] == "alice"

    response = client.get(f"/api/blogs/{blog['id']}", headers=auth_headers("bob"))
    assert response.json()["data"]["blog"]["content"] == "Thoughts"

    response = _patch(client, auth_headers("bob"), f"/blogs/{blog['id']}", {"title": "Stolen"})
    assert response.status_code == 403

    response = _patch(client, auth_headers("alice"), f"/blogs/{blog['id']}", {"visibility": "private"})
    assert response.json()["data"]["blog"]["visibility"] == "private"
    assert client.get(f"/api/blogs/{blog['id']}", headers=auth_headers("bob")).status_code == 403

    response = client.delete(f"/api/blogs/{blog['id']}", headers=auth_headers("alice"))
    assert response.json()["message"] == "Blog deleted successfully"
    assert client.get(f"/api/blogs/{blog['id']}", headers=auth_headers("alice")).status_code == 404


def test_blog_validation(client, auth_headers, alice):
    headers = auth_headers("alice")
    assert _post(client, headers, "/blogs", {"content": "c", "spoilerAlert": False}).json()["message"] == (
        "Title is required"
    )
    response = _post(client, headers, "/blogs", {"title": "t", "content": "c"})
    assert response.json()["message"] == "spoilerAlert is required and must be boolean"
    response = _post(client, headers, "/blogs", {"title": "t", "content": "c", "spoilerAlert": "yes"})
    assert response.status_code == 400


def test_blog_listing_scopes(client, auth_headers, alice, bob):
    _blog(client, auth_headers("alice"), title="Public")
    _blog(client, auth_headers("alice"), title="Friends only", visibility="friends")

    def titles(who, **params):
        response = client.get("/api/blogs", params=params, headers=auth_headers(who))
        return {b["title"] for b in response.json()["data"]["blogs"]}

    assert titles("bob") == {"Public"}
    assert titles("bob", author=alice["id"]) == {"Public"}
    assert titles("alice", author="me") == {"Public", "Friends only"}


def test_empty_author_lists_are_paginated(client, auth_headers, storage, alice):
    for i in range(21):
        storage.create_blog(
            {"user_id": alice["id"], "title": f"B{i}", "content": "c", "visibility": "public", "spoiler_alert": False}
        )
        storage.create_collection({"user_id": alice["id"], "title": f"C{i}", "visibility": "public"})

    headers = auth_headers("alice")
    blogs = client.get("/api/blogs", params={"author": ""}, headers=headers).json()["data"]["blogs"]
    assert len(blogs) == 20
    collections = client.get("/api/collections", params={"owner": ""}, headers=headers).json()["data"]
    assert len(collections["collections"]) == 20


# ===== Collections =====


def test_collection_add_and_remove_books(client, auth_headers, alice):
    headers = auth_headers("alice")
    collection = _collection(client, headers, books=[{"volumeId": "vol-1"}, {"volumeId": "vol-1"}])
    assert [b["volumeId"] for b in collection["books"]] == ["vol-1"]
    assert collection["books"][0]["addedAt"] is not None

    response = _patch(client, headers, f"/collections/{collection['id']}", {"addBook": "vol-2"})
    assert [b["volumeId"] for b in response.json()["data"]["collection"]["books"]] == ["vol-1", "vol-2"]

    response = _patch(client, headers, f"/collections/{collection['id']}", {"addBook": "vol-2"})
    assert len(response.json()["data"]["collection"]["books"]) == 2

    response = _patch(client, headers, f"/collections/{collection['id']}", {"removeBook": "vol-1"})
    assert [b["volumeId"] for b in response.json()["data"]["collection"]["books"]] == ["vol-2"]


def test_collection_rules(client, auth_headers, alice, bob):
    headers = auth_headers("alice")
    response = _post(client, headers, "/collections", {"title": "T", "description": "d" * 201})
    assert response.status_code == 400

    collection = _collection(client, headers, visibility="private")
    assert client.get(f"/api/collections/{collection['id']}", headers=auth_headers("bob")).status_code == 403

    response = _patch(client, auth_headers("bob"), f"/collections/{collection['id']}", {"title": "Mine"})
    assert response.status_code == 403

    listed = client.get("/api/collections", params={"owner": "me"}, headers=headers).json()["data"]
    assert len(listed["collections"]) == 1

    response = client.delete(f"/api/collections/{collection['id']}", headers=headers)
    assert response.json()["message"] == "Collection deleted successfully"


# ===== Reading list =====


def test_reading_list_flow(client, auth_headers, alice, bob):
    headers = auth_headers("alice")

    response = _post(client, headers, "/reading-list", {"volumeId": "vol-1", "status": "interested"})
    assert response.status_code == 200
    items = response.json()["data"]["readingList"]
    assert [i["volumeId"] for i in items] == ["vol-1"]
    item_id = items[0]["id"]

    response = _post(client, headers, "/reading-list", {"volumeId": "vol-1", "status": "interested"})
    assert response.status_code == 409
    assert response.json()["message"] == "Book already in reading list"

    response = _patch(client, headers, f"/reading-list/{item_id}", {"status": "reading"})
    assert response.status_code == 400
    assert response.json()["message"] == "startedAt is required for status 'reading' or 'completed'"

    response = _patch(
        client, headers, f"/reading-list/{item_id}", {"status": "reading", "startedAt": "2024-03-01T00:00:00Z"}
    )
    assert response.json()["data"]["readingList"][0]["status"] == "reading"

    response = _patch(
        client, headers, f"/reading-list/{item_id}", {"status": "completed", "completedAt": "2024-02-01T00:00:00Z"}
    )
    assert response.json()["message"] == "completedAt cannot be before startedAt"

    response = _patch(client, auth_headers("bob"), f"/reading-list/{item_id}", {"visibility": "private"})
    assert response.status_code == 403

    response = client.delete(f"/api/reading-list/{item_id}", headers=headers)
    assert response.json()["data"]["readingList"] == []


def test_reading_list_date_rules_on_create(client, auth_headers, alice):
    headers = auth_headers("alice")

    response = _post(client, headers, "/reading-list", {"volumeId": "vol-1", "status": "completed"})
    assert response.json()["message"] == "startedAt is required for status 'reading' or 'completed'"

    response = _post(
        client, headers, "/reading-list", {"volumeId": "vol-1", "status": "completed", "startedAt": "2024-01-01"}
    )
    assert response.json()["message"] == "completedAt is required for status 'completed'"

    response = _post(client, headers, "/reading-list", {"status": "interested"})
    assert response.json()["message"] == "volumeId and status are required"


def test_other_users_reading_list_is_public_only(client, auth_headers, alice, bob):
    headers = auth_headers("alice")
    _post(client, headers, "/reading-list", {"volumeId": "vol-1", "status": "interested"})
    _post(client, headers, "/reading-list", {"volumeId": "vol-2", "status": "interested", "visibility": "private"})

    response = client.get(f"/api/reading-list/{alice['id']}", headers=auth_headers("bob"))
    assert [i["volumeId"] for i in response.json()["data"]["readingList"]] == ["vol-1"]

    response = client.get("/api/reading-list/me", headers=headers)
    assert len(response.json()["data"]["readingList"]) == 2


# ===== Profile =====


def test_profile_me(client, auth_headers, alice):
    headers = auth_headers("alice")
    _blog(client, headers, visibility="private")
    _collection(client, headers)
    _post(client, headers, "/reading-list", {"volumeId": "vol-1", "status": "interested"})

    response = client.get("/api/profile/me", headers=headers)

    assert response.status_code == 200
    assert response.json()["message"] == "Profile data fetched successfully"
    data = response.json()["data"]
    assert data["profile_data"]["username"] == "alice"
    assert len(data["collections"]) == 1
    assert "books" not in data["collections"][0]
    assert len(data["blogs"]) == 1
    assert "content" not in data["blogs"][0]
    assert [r["volumeId"] for r in data["reading_tracker"]] == ["vol-1"]


def test_profile_preview_is_capped(client, auth_headers, alice):
    headers = auth_headers("alice")
    for i in range(7):
        _blog(client, headers, title=f"Blog {i}")

    data = client.get("/api/profile/me", headers=headers).json()["data"]
    assert len(data["blogs"]) == 5

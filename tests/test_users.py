def test_parent_creates_child_linked_to_parent(login_as):
    parent = login_as("parent")

    resp = parent.post("/api/users/", json={
        "email": "kid@family.com",
        "password": "secret1",
        "name": "Kid",
        "role": "child",
    })

    assert resp.status_code == 201
    body = resp.json()
    assert body["parentId"] == parent.user["id"]
    assert body["role"] == "child"
    assert "password_hash" not in body


def test_only_parents_create_members(login_as):
    cook = login_as("cook")
    resp = cook.post("/api/users/", json={
        "email": "kid@family.com", "password": "secret1", "name": "Kid", "role": "child"
    })
    assert resp.status_code == 403


def test_create_member_with_taken_email(login_as):
    parent = login_as("parent")
    resp = parent.post("/api/users/", json={
        "email": "parent@family.com", "password": "secret1", "name": "Again", "role": "cook"
    })
    assert resp.status_code == 400


def test_list_and_get_users(login_as):
    parent = login_as("parent")
    child = login_as("child")

    users = child.get("/api/users/").json()
    assert {user["email"] for user in users} == {"parent@family.com", "child@family.com"}

    resp = child.get(f"/api/users/{parent.user['id']}")
    assert resp.status_code == 200
    assert resp.json()["name"] == "Parent"

    assert child.get("/api/users/missing").status_code == 404


def test_user_updates_own_profile(login_as):
    child = login_as("child")

    resp = child.patch(f"/api/users/{child.user['id']}", json={
        "name": "Sam", "preferences": {"theme": "dark"}
    })

    assert resp.status_code == 200
    assert resp.json()["name"] == "Sam"
    assert resp.json()["preferences"] == {"theme": "dark"}


def test_non_parent_cannot_update_someone_else(login_as):
    parent = login_as("parent")
    child = login_as("child")

    resp = child.patch(f"/api/users/{parent.user['id']}", json={"name": "Hacked"})
    assert resp.status_code == 403

    resp = parent.patch(f"/api/users/{child.user['id']}", json={"avatar": "star.png"})
    assert resp.status_code == 200
    assert resp.json()["avatar"] == "star.png"

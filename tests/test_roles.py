import pytest

ACTIVITY = {
    "title": "Football practice",
    "startTime": "2024-05-01T17:00:00",
    "activityType": "sports",
}


def test_child_cannot_create_activity(login_as):
    parent = login_as("parent")
    child = login_as("child")

    resp = child.post("/api/activities/", json=ACTIVITY)

    assert resp.status_code == 403
    assert parent.get("/api/activities/").json() == []


def test_unauthenticated_request_is_rejected(client):
    resp = client.post("/api/activities/", json=ACTIVITY)
    assert resp.status_code == 401
    assert resp.json() == {"detail": "Authentication required"}


@pytest.mark.parametrize("role, path, allowed", [
    ("parent", "/api/meals/", True),
    ("cook", "/api/meals/", True),
    ("child", "/api/meals/", False),
    ("admin", "/api/meals/", False),
    ("parent", "/api/meal-plans/", True),
    ("cook", "/api/meal-plans/", True),
    ("child", "/api/meal-plans/", False),
    ("parent", "/api/activities/", True),
    ("child", "/api/activities/", True),
    ("cook", "/api/activities/", False),
    ("child", "/api/shopping-lists/", True),
    ("child", "/api/users/", True),
])
def test_read_access_by_role(login_as, role, path, allowed):
    member = login_as(role)

    resp = member.get(path)

    assert resp.status_code == (200 if allowed else 403)


def test_cook_cannot_manage_activities(login_as):
    cook = login_as("cook")
    assert cook.post("/api/activities/", json=ACTIVITY).status_code == 403


def test_child_cannot_create_shopping_list(login_as):
    child = login_as("child")
    resp = child.post("/api/shopping-lists/", json={"name": "Sweets"})
    assert resp.status_code == 403

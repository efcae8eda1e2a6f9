def _activity(parent, **overrides):
    body = {
        "title": "Piano lesson",
        "startTime": "2024-05-01T16:00:00",
        "activityType": "music",
        **overrides,
    }
    resp = parent.post("/api/activities/", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_parent_schedules_activity_for_child(login_as):
    parent = login_as("parent")
    child = login_as("child")

    activity = _activity(parent, assigned_to=child.user["id"])

    assert activity["createdBy"] == parent.user["id"]

    listed = child.get("/api/activities/").json()
    assert len(listed) == 1
    assert listed[0]["assignedUser"]["id"] == child.user["id"]
    assert listed[0]["createdByUser"]["id"] == parent.user["id"]


def test_filter_by_user_and_date(login_as):
    parent = login_as("parent")
    child = login_as("child")
    lesson = _activity(parent, assigned_to=child.user["id"])
    _activity(parent, title="Dentist", start_time="2024-05-02T09:30:00", activity_type="appointment")

    by_user = parent.get("/api/activities/", params={"userId": child.user["id"]}).json()
    assert [a["id"] for a in by_user] == [lesson["id"]]

    by_date = parent.get("/api/activities/", params={"date": "2024-05-02"}).json()
    assert [a["title"] for a in by_date] == ["Dentist"]


def test_bad_date_filter_is_bad_request(login_as):
    parent = login_as("parent")
    resp = parent.get("/api/activities/", params={"date": "May 2nd"})
    assert resp.status_code == 400


def test_update_and_delete_activity(login_as):
    parent = login_as("parent")
    activity = _activity(parent)

    resp = parent.put(f"/api/activities/{activity['id']}", json={"completed": True, "location": "School"})
    assert resp.status_code == 200
    assert resp.json()["completed"] is True
    assert resp.json()["location"] == "School"

    assert parent.delete(f"/api/activities/{activity['id']}").status_code == 204
    assert parent.get("/api/activities/").json() == []
    assert parent.put("/api/activities/missing", json={"completed": True}).status_code == 404


def test_missing_required_field_is_bad_request(login_as):
    parent = login_as("parent")
    resp = parent.post("/api/activities/", json={"title": "No time", "activityType": "sports"})
    assert resp.status_code == 400
    assert resp.json()["detail"].startswith("Invalid request data")


def test_null_fields_in_activity_update_are_ignored(login_as):
    parent = login_as("parent")
    activity = _activity(parent)

    resp = parent.put(f"/api/activities/{activity['id']}", json={
        "title": None, "startTime": None, "activityType": None, "recurring": None, "location": "Hall"
    })

    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == "Piano lesson"
    assert body["activityType"] == "music"
    assert body["startTime"].startswith("2024-05-01T16:00:00")
    assert body["location"] == "Hall"

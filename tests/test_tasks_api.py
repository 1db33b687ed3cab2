def descriptions(response):
    return [t["description"] for t in response.json()]


def test_requires_authentication(anonymous_client):
    assert anonymous_client.get("/api/tasks").status_code == 401
    assert anonymous_client.post("/api/tasks", json={"description": "x"}).status_code == 401


def test_list_tasks(client_for, alice, make_task):
    make_task(alice, "open", age=5)
    make_task(alice, "done", completed=True, age=1)

    response = client_for(alice).get("/api/tasks")

    assert response.status_code == 200
    assert descriptions(response) == ["open", "done"]
    assert set(response.json()[0]) == {"id", "description", "completed", "created_at", "updated_at"}


def test_create_task_returns_ordered_list(client_for, alice, make_task):
    make_task(alice, "older", age=60)

    response = client_for(alice).post("/api/tasks", json={"description": "Test task description"})

    assert response.status_code == 201
    assert descriptions(response) == ["Test task description", "older"]
    assert response.json()[0]["completed"] is False


def test_create_task_validation_errors(client_for, alice, store):
    client = client_for(alice)

    for description in ("", "a" * 501):
        response = client.post("/api/tasks", json={"description": description})
        assert response.status_code == 422
        assert "description" in response.json()["detail"]["errors"]

    assert store.list_by_owner(alice.id) == []


def test_get_task(client_for, alice, make_task):
    task = make_task(alice, "single")

    response = client_for(alice).get(f"/api/tasks/{task.id}")

    assert response.status_code == 200
    assert response.json()["description"] == "single"


def test_update_description(client_for, alice, make_task):
    task = make_task(alice, "Original description")

    response = client_for(alice).patch(f"/api/tasks/{task.id}", json={"description": "Updated description"})

    assert response.status_code == 200
    assert descriptions(response) == ["Updated description"]


def test_toggle_completion(client_for, alice, make_task):
    task = make_task(alice, "toggle me")

    response = client_for(alice).patch(f"/api/tasks/{task.id}", json={"completed": True})

    assert response.status_code == 200
    assert response.json()[0]["completed"] is True


def test_update_with_invalid_description(client_for, alice, make_task):
    task = make_task(alice, "stays")

    response = client_for(alice).patch(f"/api/tasks/{task.id}", json={"description": "a" * 501})

    assert response.status_code == 422


def test_delete_task(client_for, alice, make_task):
    task = make_task(alice, "delete me")
    client = client_for(alice)

    response = client.delete(f"/api/tasks/{task.id}")

    assert response.status_code == 200
    assert response.json() == []
    assert client.get(f"/api/tasks/{task.id}").status_code == 404


def test_unknown_task_returns_404(client_for, alice):
    client = client_for(alice)

    assert client.patch("/api/tasks/999", json={"completed": True}).status_code == 404
    assert client.delete("/api/tasks/999").status_code == 404


def test_user_cannot_access_other_users_tasks(client_for, alice, bob, make_task, store):
    task = make_task(bob, "bob's private task")
    client = client_for(alice)

    response = client.patch(f"/api/tasks/{task.id}", json={"description": "Malicious update"})
    assert response.status_code == 403
    assert "bob's private task" not in response.text

    assert client.delete(f"/api/tasks/{task.id}").status_code == 403
    assert client.get(f"/api/tasks/{task.id}").status_code == 403

    assert store.get(task.id).description == "bob's private task"
    assert descriptions(client.get("/api/tasks")) == []


def test_buy_milk_scenario(client_for, alice):
    client = client_for(alice)

    created = client.post("/api/tasks", json={"description": "Buy milk"}).json()
    task_id = created[0]["id"]
    assert created[0]["completed"] is False

    toggled = client.patch(f"/api/tasks/{task_id}", json={"completed": True}).json()
    assert toggled[0]["completed"] is True

    assert client.delete(f"/api/tasks/{task_id}").json() == []
    assert client.get("/api/tasks").json() == []


def test_health(anonymous_client):
    response = anonymous_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_create_without_description_uses_field_errors(client_for, alice):
    response = client_for(alice).post("/api/tasks", json={})

    assert response.status_code == 422
    assert response.json()["detail"]["errors"]["description"] == ["The description field is required."]

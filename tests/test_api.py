"""API endpoint tests: health, authentication and projects."""

from src.config import Settings, get_settings
from src.main import app


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_register_user(client):
    """Test user registration."""
    response = client.post(
        "/api/v1/auth/register",
        json={"username": "newuser", "password": "password123", "email": "new@example.com"},
    )
    assert response.status_code == 201
    assert "access_token" in response.json()
    assert response.json()["user"]["username"] == "newuser"


def test_register_duplicate_username(client, auth_headers):
    """Test registration with a taken username fails."""
    response = client.post(
        "/api/v1/auth/register",
        json={"username": "testuser", "password": "password123"},
    )
    assert response.status_code == 400
    assert "already taken" in response.json()["detail"]


def test_login(client, auth_headers):
    """Test user login."""
    response = client.post(
        "/api/v1/auth/login", json={"username": "testuser", "password": "testpass123"}
    )
    assert response.status_code == 200
    assert "access_token" in response.json()
    assert "access_token" in response.cookies


def test_login_wrong_password(client, auth_headers):
    """Test login with wrong password."""
    response = client.post(
        "/api/v1/auth/login", json={"username": "testuser", "password": "wrongpass"}
    )
    assert response.status_code == 401


def test_get_current_user(client, auth_headers):
    """Test getting current user info."""
    response = client.get("/api/v1/auth/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["username"] == "testuser"


def test_session_cookie_authenticates(client, auth_headers):
    """The cookie set at login is enough to reach protected endpoints."""
    client.post("/api/v1/auth/login", json={"username": "testuser", "password": "testpass123"})

    response = client.get("/api/v1/auth/me")
    assert response.status_code == 200
    assert response.json()["id"] == auth_headers.user_id


def test_requires_authentication(client):
    """Test that protected endpoints reject anonymous requests."""
    assert client.get("/api/v1/projects").status_code == 401
    assert client.get("/api/v1/auth/me", headers={"Authorization": "Bearer nope"}).status_code == 401


def test_create_project_with_default_columns(client, auth_headers, project):
    """A new project gets the configured board columns."""
    assert project["name"] == "Test Project"
    assert project["owner_id"] == auth_headers.user_id

    response = client.get(f"/api/v1/projects/{project['id']}/columns", headers=auth_headers)
    assert response.status_code == 200
    columns = response.json()
    assert [c["title"] for c in columns] == ["Backlog", "Ready", "Work in progress", "Done"]
    assert [c["position"] for c in columns] == [1, 2, 3, 4]


def test_create_project_with_default_categories(client, auth_headers):
    """Default categories come from the comma-separated setting."""
    app.dependency_overrides[get_settings] = lambda: Settings(
        project_categories=" Bug, ,Feature ,Support ", board_columns="Todo, Done"
    )

    response = client.post("/api/v1/projects", headers=auth_headers, json={"name": "Configured"})
    assert response.status_code == 201
    project_id = response.json()["id"]

    categories = client.get(
        f"/api/v1/projects/{project_id}/categories", headers=auth_headers
    ).json()
    assert [c["name"] for c in categories] == ["Bug", "Feature", "Support"]

    columns = client.get(f"/api/v1/projects/{project_id}/columns", headers=auth_headers).json()
    assert [c["title"] for c in columns] == ["Todo", "Done"]


def test_get_projects(client, auth_headers, other_headers, project):
    """Users only see their own projects."""
    response = client.get("/api/v1/projects", headers=auth_headers)
    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == [project["id"]]

    response = client.get("/api/v1/projects", headers=other_headers)
    assert response.json() == []

    response = client.get(f"/api/v1/projects/{project['id']}", headers=other_headers)
    assert response.status_code == 404


def test_duplicate_project(client, auth_headers, project):
    """Cloning copies columns and categories."""
    for name in ("Bug", "Feature"):
        client.post(
            f"/api/v1/projects/{project['id']}/categories",
            headers=auth_headers,
            json={"name": name},
        )

    response = client.post(f"/api/v1/projects/{project['id']}/duplicate", headers=auth_headers)
    assert response.status_code == 201
    clone = response.json()
    assert clone["name"] == "Test Project (Clone)"
    assert clone["id"] != project["id"]

    categories = client.get(
        f"/api/v1/projects/{clone['id']}/categories", headers=auth_headers
    ).json()
    assert [c["name"] for c in categories] == ["Bug", "Feature"]
    assert all(c["project_id"] == clone["id"] for c in categories)

    columns = client.get(f"/api/v1/projects/{clone['id']}/columns", headers=auth_headers).json()
    assert len(columns) == 4


def test_create_task_in_first_column(client, auth_headers, project):
    """Tasks land in the first column without category by default."""
    columns = client.get(f"/api/v1/projects/{project['id']}/columns", headers=auth_headers).json()

    response = client.post(
        f"/api/v1/projects/{project['id']}/tasks",
        headers=auth_headers,
        json={"title": "Write docs"},
    )
    assert response.status_code == 201
    task = response.json()
    assert task["column_id"] == columns[0]["id"]
    assert task["category_id"] == 0
    assert task["position"] == 1


def test_task_category_must_belong_to_project(client, auth_headers, project):
    """A category of another project can't be assigned."""
    other = client.post("/api/v1/projects", headers=auth_headers, json={"name": "Other"}).json()
    category = client.post(
        f"/api/v1/projects/{other['id']}/categories",
        headers=auth_headers,
        json={"name": "Elsewhere"},
    ).json()

    response = client.post(
        f"/api/v1/projects/{project['id']}/tasks",
        headers=auth_headers,
        json={"title": "Misfiled", "category_id": category["id"]},
    )
    assert response.status_code == 400


def test_update_task_category(client, auth_headers, project):
    """Test moving a task into a category."""
    category = client.post(
        f"/api/v1/projects/{project['id']}/categories",
        headers=auth_headers,
        json={"name": "Bug"},
    ).json()
    task = client.post(
        f"/api/v1/projects/{project['id']}/tasks",
        headers=auth_headers,
        json={"title": "Crash on save"},
    ).json()

    response = client.put(
        f"/api/v1/tasks/{task['id']}",
        headers=auth_headers,
        json={"category_id": category["id"]},
    )
    assert response.status_code == 200
    assert response.json()["category_id"] == category["id"]
    assert response.json()["title"] == "Crash on save"

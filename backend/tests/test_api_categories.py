"""Tests for the category catalog endpoints."""

from tests.conftest import create_category, create_session


def test_public_list_hides_prompt_and_redirect_flag(client, admin_headers, user_headers):
    create_category(client, admin_headers, "Anxiety Support", icon="Brain", gradient="from-blue")
    response = client.get("/api/categories/public", headers=user_headers)
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1
    assert data[0]["name"] == "Anxiety Support"
    assert data[0]["icon"] == "Brain"
    assert data[0]["gradient"] == "from-blue"
    assert "prompt" not in data[0]
    assert "redirectableToOtherCategory" not in data[0]


def test_public_list_requires_token(client):
    response = client.get("/api/categories/public")
    assert response.status_code == 401


def test_admin_routes_reject_regular_user(client, user_headers):
    assert client.get("/api/categories/", headers=user_headers).status_code == 403
    response = client.post(
        "/api/categories/",
        json={"name": "X", "description": "d", "prompt": "p"},
        headers=user_headers,
    )
    assert response.status_code == 403
    assert response.json() == {"error": "Admin access required"}


def test_create_and_get_category(client, admin_headers):
    created = create_category(client, admin_headers, "  Sleep  ", redirectable=True)
    assert created["name"] == "Sleep"
    assert created["redirectableToOtherCategory"] is True
    assert created["imageUrl"] == ""

    response = client.get(f"/api/categories/{created['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["prompt"] == created["prompt"]


def test_create_requires_fields(client, admin_headers):
    response = client.post(
        "/api/categories/", json={"name": "X", "description": "", "prompt": "p"}, headers=admin_headers
    )
    assert response.status_code == 400


def test_duplicate_name_rejected_without_mutation(client, admin_headers):
    create_category(client, admin_headers, "Grief")
    response = client.post(
        "/api/categories/",
        json={"name": "Grief", "description": "other", "prompt": "other"},
        headers=admin_headers,
    )
    assert response.status_code == 409
    assert "error" in response.json()

    categories = client.get("/api/categories/", headers=admin_headers).json()
    assert len(categories) == 1
    assert categories[0]["description"] == "Grief conversations"


def test_update_is_partial(client, admin_headers):
    created = create_category(client, admin_headers, "Stress")
    response = client.put(
        f"/api/categories/{created['id']}",
        json={"textColor": "text-white"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["textColor"] == "text-white"
    assert data["name"] == "Stress"
    assert data["prompt"] == created["prompt"]


def test_update_to_existing_name_rejected(client, admin_headers):
    create_category(client, admin_headers, "Stress")
    other = create_category(client, admin_headers, "Sleep")
    response = client.put(
        f"/api/categories/{other['id']}", json={"name": "Stress"}, headers=admin_headers
    )
    assert response.status_code == 409


def test_update_keeping_own_name(client, admin_headers):
    created = create_category(client, admin_headers, "Stress")
    response = client.put(
        f"/api/categories/{created['id']}",
        json={"name": "Stress", "description": "new"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["description"] == "new"


def test_get_missing_category(client, admin_headers):
    response = client.get("/api/categories/9999", headers=admin_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Category not found"}


def test_delete_leaves_sessions_dangling(client, admin_headers, user_headers):
    category = create_category(client, admin_headers, "Temporary")
    session = create_session(client, user_headers, category["id"])

    response = client.delete(f"/api/categories/{category['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Category deleted successfully"}

    fetched = client.get(f"/sessions/{session['id']}", headers=user_headers)
    assert fetched.status_code == 200
    assert fetched.json()["conversationCategoryId"] == category["id"]
    assert fetched.json()["category"] is None

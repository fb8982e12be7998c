"""
Tests for the HTTP API.

Each test gets its own app (and therefore its own store) through the
`client` fixture.
"""
import pytest
from fastapi.testclient import TestClient

from app.main import create_app

ARTICLE = {
    "title": "ARM Cortex-M Exception Handling",
    "content": "Vector tables, NVIC and tail-chaining.",
    "excerpt": "How exceptions work on Cortex-M",
    "domainId": "hardware-architectures",
    "status": "published",
    "tags": ["arm", "interrupts"],
}

PROJECT = {
    "title": "LoRa Soil Sensor",
    "description": "Battery powered soil moisture node.",
    "domainId": "iot-cloud",
    "githubUrl": "https://github.com/example/soil",
    "technologies": ["C", "LoRaWAN"],
}


def _create(client, path, payload, **overrides):
    response = client.post(path, json={**payload, **overrides})
    assert response.status_code == 201, response.text
    return response.json()


# ============================================
# Service endpoints
# ============================================

def test_root_and_health(client):
    root = client.get("/")
    assert root.status_code == 200
    assert root.json()["status"] == "running"

    health = client.get("/health")
    assert health.status_code == 200
    assert health.json()["status"] == "healthy"


# ============================================
# Domains
# ============================================

def test_list_domains_returns_seed_catalog(client):
    response = client.get("/api/domains")

    assert response.status_code == 200
    domains = response.json()
    assert len(domains) == 9
    assert domains[0]["id"] == "embedded-systems"
    assert domains[0]["articlesCount"] == 42
    assert "createdAt" in domains[0] and "updatedAt" in domains[0]


def test_get_domain(client):
    response = client.get("/api/domains/ai-ml")

    assert response.status_code == 200
    assert response.json()["name"] == "AI & Machine Learning"


def test_get_missing_domain_is_404(client):
    response = client.get("/api/domains/nope")

    assert response.status_code == 404
    assert response.json()["detail"] == "Domain not found"


def test_create_domain(client):
    created = _create(client, "/api/domains", {
        "name": "Robotics",
        "description": "Kinematics, ROS and motor control.",
        "icon": "fas fa-robot",
        "color": "gray",
        "progress": 10,
    })

    assert created["progress"] == 10
    assert created["articlesCount"] == 0
    assert created["createdAt"] == created["updatedAt"]
    assert client.get(f"/api/domains/{created['id']}").status_code == 200


def test_create_domain_rejects_coerced_progress(client):
    """"5" is not an int - the failing field is reported"""
    response = client.post("/api/domains", json={
        "name": "Robotics",
        "description": "d",
        "icon": "i",
        "color": "c",
        "progress": "5",
    })

    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Invalid domain data"
    assert [e["field"] for e in body["errors"]] == ["progress"]


def test_create_domain_reports_every_missing_field(client):
    response = client.post("/api/domains", json={"name": "Only a name"})

    assert response.status_code == 400
    fields = {e["field"] for e in response.json()["errors"]}
    assert fields == {"description", "icon", "color"}


def test_update_domain(client):
    response = client.patch("/api/domains/ai-ml", json={"progress": 80})

    assert response.status_code == 200
    body = response.json()
    assert body["progress"] == 80
    assert body["name"] == "AI & Machine Learning"


def test_delete_domain_in_use_is_409(client):
    _create(client, "/api/articles", ARTICLE)

    response = client.delete("/api/domains/hardware-architectures")

    assert response.status_code == 409
    assert response.json()["articles"] == 1
    assert client.get("/api/domains/hardware-architectures").status_code == 200


def test_delete_unused_domain(client):
    assert client.delete("/api/domains/product-development").status_code == 204
    assert client.delete("/api/domains/product-development").status_code == 404


# ============================================
# Articles
# ============================================

def test_article_crud(client):
    created = _create(client, "/api/articles", ARTICLE)
    article_id = created["id"]

    assert created["domainId"] == "hardware-architectures"
    assert created["tags"] == ["arm", "interrupts"]
    assert created["attachments"] == []

    fetched = client.get(f"/api/articles/{article_id}")
    assert fetched.status_code == 200
    assert fetched.json() == created

    updated = client.patch(f"/api/articles/{article_id}", json={"status": "completed", "excerpt": None})
    assert updated.status_code == 200
    assert updated.json()["status"] == "completed"
    assert updated.json()["excerpt"] is None
    assert updated.json()["title"] == ARTICLE["title"]
    assert updated.json()["createdAt"] == created["createdAt"]

    assert client.delete(f"/api/articles/{article_id}").status_code == 204
    assert client.get(f"/api/articles/{article_id}").status_code == 404
    assert client.delete(f"/api/articles/{article_id}").status_code == 404


def test_list_articles_by_domain(client):
    mine = _create(client, "/api/articles", ARTICLE)
    _create(client, "/api/articles", ARTICLE, domainId="ai-ml")

    response = client.get("/api/articles", params={"domainId": "hardware-architectures"})

    assert response.status_code == 200
    assert [a["id"] for a in response.json()] == [mine["id"]]
    assert len(client.get("/api/articles").json()) == 2


def test_create_article_with_unknown_domain_is_400(client):
    response = client.post("/api/articles", json={**ARTICLE, "domainId": "no-such-domain"})

    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Invalid article data"
    assert body["errors"][0]["field"] == "domainId"


@pytest.mark.parametrize("overrides, field", [
    ({"title": ""}, "title"),
    ({"status": "archived"}, "status"),
    ({"tags": "arm"}, "tags"),
    ({"tags": ["arm", 3]}, "tags.1"),
])
def test_create_article_validation(client, overrides, field):
    response = client.post("/api/articles", json={**ARTICLE, **overrides})

    assert response.status_code == 400
    assert field in [e["field"] for e in response.json()["errors"]]


def test_update_article_rejects_null_title(client):
    created = _create(client, "/api/articles", ARTICLE)

    response = client.patch(f"/api/articles/{created['id']}", json={"title": None})

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "title"


def test_update_missing_article_is_404(client):
    response = client.patch("/api/articles/missing", json={"title": "x"})

    assert response.status_code == 404
    assert response.json()["detail"] == "Article not found"


def test_update_article_with_unknown_domain_is_400(client):
    created = _create(client, "/api/articles", ARTICLE)

    response = client.patch(f"/api/articles/{created['id']}", json={"domainId": "no-such-domain"})

    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Invalid article data"
    assert body["errors"][0]["field"] == "domainId"
    assert client.get(f"/api/articles/{created['id']}").json()["domainId"] == ARTICLE["domainId"]


def test_update_missing_article_with_unknown_domain_is_404(client):
    response = client.patch("/api/articles/missing", json={"domainId": "no-such-domain"})

    assert response.status_code == 404
    assert response.json()["detail"] == "Article not found"


# ============================================
# Projects
# ============================================

def test_project_crud(client):
    created = _create(client, "/api/projects", PROJECT)
    project_id = created["id"]

    assert created["featured"] is False
    assert created["status"] == "draft"
    assert created["githubUrl"] == PROJECT["githubUrl"]
    assert created["demoUrl"] is None

    updated = client.patch(f"/api/projects/{project_id}", json={"featured": True, "demoUrl": "https://demo.example"})
    assert updated.status_code == 200
    assert updated.json()["featured"] is True
    assert updated.json()["technologies"] == ["C", "LoRaWAN"]

    assert client.delete(f"/api/projects/{project_id}").status_code == 204
    assert client.get(f"/api/projects/{project_id}").status_code == 404


def test_featured_projects_filter(client):
    featured = _create(client, "/api/projects", PROJECT, featured=True)
    _create(client, "/api/projects", PROJECT, title="Plain")

    response = client.get("/api/projects", params={"featured": "true"})

    assert [p["id"] for p in response.json()] == [featured["id"]]
    assert len(client.get("/api/projects").json()) == 2


def test_featured_projects_filter_with_domain(client):
    _create(client, "/api/projects", PROJECT, featured=True)
    other = _create(client, "/api/projects", PROJECT, featured=True, domainId="ai-ml")

    response = client.get("/api/projects", params={"featured": "true", "domainId": "ai-ml"})

    assert [p["id"] for p in response.json()] == [other["id"]]


def test_create_project_with_unknown_domain_is_400(client):
    response = client.post("/api/projects", json={**PROJECT, "domainId": "no-such-domain"})

    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Invalid project data"
    assert body["errors"][0]["field"] == "domainId"
    assert client.get("/api/projects").json() == []


def test_update_project_with_unknown_domain_is_400(client):
    created = _create(client, "/api/projects", PROJECT)

    response = client.patch(f"/api/projects/{created['id']}", json={"domainId": "no-such-domain"})

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "domainId"


def test_update_missing_project_with_unknown_domain_is_404(client):
    response = client.patch("/api/projects/missing", json={"domainId": "no-such-domain"})

    assert response.status_code == 404
    assert response.json()["detail"] == "Project not found"


def test_create_project_rejects_non_bool_featured(client):
    response = client.post("/api/projects", json={**PROJECT, "featured": 1})

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid project data"


# ============================================
# Search and stats
# ============================================

def test_search(client):
    created = _create(client, "/api/articles", ARTICLE)

    response = client.get("/api/search", params={"q": "cortex"})
    assert response.status_code == 200
    assert [a["id"] for a in response.json()["articles"]] == [created["id"]]

    response = client.get("/api/search", params={"q": "nonexistent-token-xyz"})
    assert response.json() == {"articles": []}


@pytest.mark.parametrize("params", [{}, {"q": ""}])
def test_search_requires_query(client, params):
    response = client.get("/api/search", params=params)

    assert response.status_code == 400
    assert response.json()["detail"] == "Search query is required"


def test_stats(client):
    for i in range(3):
        _create(client, "/api/articles", ARTICLE, title=f"Article {i}")
    for i in range(2):
        _create(client, "/api/projects", PROJECT, title=f"Project {i}")

    response = client.get("/api/stats")

    assert response.status_code == 200
    assert response.json() == {
        "totalArticles": 3,
        "totalProjects": 2,
        "totalDomains": 9,
        "hoursLearned": 1240,
    }


def test_hours_learned_comes_from_settings(settings):
    settings.hours_learned = 42

    with TestClient(create_app(settings)) as client:
        assert client.get("/api/stats").json()["hoursLearned"] == 42


# ============================================
# Unexpected errors
# ============================================

def test_unexpected_error_is_500_without_details(settings):
    with TestClient(create_app(settings), raise_server_exceptions=False) as client:
        async def broken():
            raise RuntimeError("disk on fire")

        client.app.state.storage.get_stats = broken

        response = client.get("/api/stats")

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}


def test_sql_backend_serves_api(settings):
    settings.storage_backend = "sql"
    settings.database_url = "sqlite+aiosqlite:///:memory:"

    with TestClient(create_app(settings)) as client:
        created = _create(client, "/api/articles", ARTICLE)
        assert client.get("/api/search", params={"q": "NVIC"}).json()["articles"][0]["id"] == created["id"]
        assert client.get("/api/stats").json()["totalDomains"] == 9

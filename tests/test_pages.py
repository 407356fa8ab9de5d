"""Tests for the public and admin pages."""


def test_home_shows_default_catalog_when_nothing_featured(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "Marketing Agency Website" in resp.text
    assert "Architectural Visualization Studio" in resp.text


def test_home_shows_featured_projects(client):
    client.post("/api/projects", json={"action": "migrate", "projects": [
        {"id": "harbor", "slug": "harbor", "title": "Harbor Rebrand", "featured": "1"},
        {"id": "quiet", "slug": "quiet", "title": "Quiet Launch", "featured": 0},
    ]})
    resp = client.get("/")
    assert "Harbor Rebrand" in resp.text
    assert "Quiet Launch" not in resp.text
    assert "Marketing Agency Website" not in resp.text


def test_projects_and_detail_pages(client):
    client.post("/api/projects", json={"action": "create", "project": {
        "title": "Harbor Rebrand", "slug": "harbor", "category": "Branding", "services": ["Identity"],
    }})
    assert "Harbor Rebrand" in client.get("/projects").text

    detail = client.get("/projects/harbor")
    assert detail.status_code == 200
    assert "Identity" in detail.text
    # placeholders fill in missing media
    assert "via.placeholder.com" in detail.text

    assert client.get("/projects/missing").status_code == 404


def test_static_pages_render(client):
    for path in ("/services", "/about", "/contact", "/admin/projects"):
        assert client.get(path).status_code == 200


def test_home_survives_non_finite_order(client):
    client.post(
        "/api/projects",
        content=b'{"action": "migrate", "projects": [{"id": "odd", "title": "Odd Order", "featured": true, "order": Infinity}]}',
        headers={"content-type": "application/json"},
    )
    resp = client.get("/")
    assert resp.status_code == 200
    assert "Odd Order" in resp.text

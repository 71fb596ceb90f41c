"""Project Routes — listing, visibility rules, CRUD, toggles and reports.

Tests:
    - Anonymous listing hides hidden projects; signed-in include_hidden shows them
    - Filters (category, featured, search), pagination and sort whitelisting
    - PUT replaces, PATCH applies only sent fields, null or blank required text is a 400
    - Reports are appended and removed by id
    - Delete releases media even when the media host fails
"""

import pytest

IMG = "https://res.cloudinary.com/demo/image/upload/v1/portfolio/images/home.png"


def _payload(**overrides):
    data = {
        "title": "Portfolio Site",
        "description": "Personal site built with React.",
        "short_description": "My personal site",
        "technologies": ["React", "FastAPI"],
        "images": [{"url": IMG, "alt": "Home", "public_id": "portfolio/images/home"}],
        "live_urls": ["https://me.dev"],
        "category": "web",
    }
    data.update(overrides)
    return data


@pytest.fixture
def create_project(client, editor_headers):
    async def factory(**overrides):
        res = await client.post(
            "/api/v1/projects", json=_payload(**overrides), headers=editor_headers,
        )
        assert res.status_code == 201, res.text
        return res.json()
    return factory


async def test_create_requires_auth(client):
    res = await client.post("/api/v1/projects", json=_payload())
    assert res.status_code == 401


async def test_create_returns_project_with_view(create_project):
    project = await create_project()
    assert project["title"] == "Portfolio Site"
    assert project["images"][0]["id"]
    view = project["view"]
    assert view["preview"]["type"] == "custom"
    assert "e_blur:1000" in view["preview"]["placeholder"]
    assert view["links"] == [{"type": "live", "url": "https://me.dev", "label": "Live Demo 1"}]
    assert view["badge"]["text"] == "completed"


async def test_create_validation_error(client, editor_headers):
    res = await client.post(
        "/api/v1/projects", json=_payload(title="", category="embedded"),
        headers=editor_headers,
    )
    assert res.status_code == 400
    fields = {d["field"] for d in res.json()["error"]["details"]}
    assert {"body.title", "body.category"} <= fields


async def test_hidden_projects_are_private(client, create_project, editor_headers):
    hidden = await create_project(title="Secret", visible=False)
    await create_project(title="Public")

    anon = await client.get("/api/v1/projects")
    assert [p["title"] for p in anon.json()["projects"]] == ["Public"]

    anon_get = await client.get(f"/api/v1/projects/{hidden['id']}")
    assert anon_get.status_code == 404

    authed = await client.get(
        "/api/v1/projects", params={"include_hidden": True}, headers=editor_headers,
    )
    assert {p["title"] for p in authed.json()["projects"]} == {"Secret", "Public"}

    authed_get = await client.get(f"/api/v1/projects/{hidden['id']}", headers=editor_headers)
    assert authed_get.status_code == 200


async def test_include_hidden_ignored_for_anonymous(client, create_project):
    await create_project(visible=False)
    res = await client.get("/api/v1/projects", params={"include_hidden": True})
    assert res.json()["projects"] == []


async def test_filters(client, create_project):
    await create_project(title="Shop App", category="mobile", featured=True)
    await create_project(title="Blog", short_description="Writing about shops")
    await create_project(title="Game", category="desktop")

    mobile = await client.get("/api/v1/projects", params={"category": "mobile"})
    assert [p["title"] for p in mobile.json()["projects"]] == ["Shop App"]

    featured = await client.get("/api/v1/projects", params={"featured": True})
    assert [p["title"] for p in featured.json()["projects"]] == ["Shop App"]

    search = await client.get("/api/v1/projects", params={"search": "shop"})
    assert {p["title"] for p in search.json()["projects"]} == {"Shop App", "Blog"}


async def test_pagination_and_order(client, create_project):
    await create_project(title="Third", order=3)
    await create_project(title="First", order=1)
    await create_project(title="Second", order=2)

    res = await client.get("/api/v1/projects", params={"limit": 2})
    body = res.json()
    assert [p["title"] for p in body["projects"]] == ["First", "Second"]
    assert body["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}

    page2 = await client.get("/api/v1/projects", params={"limit": 2, "page": 2})
    assert [p["title"] for p in page2.json()["projects"]] == ["Third"]

    by_title = await client.get(
        "/api/v1/projects", params={"sort": "title", "order": "asc"},
    )
    assert [p["title"] for p in by_title.json()["projects"]] == ["First", "Second", "Third"]


async def test_unknown_sort_field_rejected(client):
    res = await client.get("/api/v1/projects", params={"sort": "password"})
    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["field"] == "sort"


async def test_limit_above_maximum_rejected(client):
    res = await client.get("/api/v1/projects", params={"limit": 500})
    assert res.status_code == 400


async def test_patch_updates_only_sent_fields(client, create_project, editor_headers):
    project = await create_project()
    res = await client.patch(
        f"/api/v1/projects/{project['id']}",
        json={"status": "in-progress", "technologies": ["Vue", " "]},
        headers=editor_headers,
    )
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "in-progress"
    assert body["technologies"] == ["Vue"]
    assert body["title"] == "Portfolio Site"
    assert body["view"]["badge"]["text"] == "in progress"


async def test_patch_null_on_required_field_rejected(client, create_project, editor_headers):
    project = await create_project()
    res = await client.patch(
        f"/api/v1/projects/{project['id']}", json={"title": None}, headers=editor_headers,
    )
    assert res.status_code == 400


@pytest.mark.parametrize("field", ["title", "short_description"])
async def test_patch_whitespace_text_rejected(client, create_project, editor_headers, field):
    project = await create_project()
    res = await client.patch(
        f"/api/v1/projects/{project['id']}", json={field: "   "}, headers=editor_headers,
    )
    assert res.status_code == 400

    res = await client.get(f"/api/v1/projects/{project['id']}")
    assert res.json()[field] == project[field]


async def test_patch_strips_title(client, create_project, editor_headers):
    project = await create_project()
    res = await client.patch(
        f"/api/v1/projects/{project['id']}", json={"title": "  Renamed  "}, headers=editor_headers,
    )
    assert res.status_code == 200
    assert res.json()["title"] == "Renamed"


async def test_put_replaces_document(client, create_project, editor_headers):
    project = await create_project()
    res = await client.put(
        f"/api/v1/projects/{project['id']}",
        json={"title": "New", "description": "Fresh", "short_description": "Fresh"},
        headers=editor_headers,
    )
    assert res.status_code == 200
    body = res.json()
    assert body["title"] == "New"
    assert body["images"] == []
    assert body["technologies"] == []


async def test_visibility_and_featured_toggles(client, create_project, editor_headers):
    project = await create_project()
    res = await client.patch(
        f"/api/v1/projects/{project['id']}/visibility",
        json={"visible": False}, headers=editor_headers,
    )
    assert res.json() == {"id": project["id"], "visible": False}
    assert (await client.get(f"/api/v1/projects/{project['id']}")).status_code == 404

    res = await client.patch(
        f"/api/v1/projects/{project['id']}/featured",
        json={"featured": True}, headers=editor_headers,
    )
    assert res.json() == {"id": project["id"], "featured": True}


async def test_reports_add_and_remove(client, create_project, editor_headers, fake_media):
    project = await create_project()
    added = await client.post(
        f"/api/v1/projects/{project['id']}/reports",
        json={
            "title": "Case study", "type": "file",
            "file_url": "https://res.cloudinary.com/demo/raw/upload/v1/report.docx",
            "public_id": "portfolio/files/report.docx",
        },
        headers=editor_headers,
    )
    assert added.status_code == 201
    report_id = added.json()["id"]

    fetched = await client.get(f"/api/v1/projects/{project['id']}")
    assert [r["id"] for r in fetched.json()["reports"]] == [report_id]

    removed = await client.delete(
        f"/api/v1/projects/{project['id']}/reports/{report_id}", headers=editor_headers,
    )
    assert removed.status_code == 204
    assert fake_media.destroyed == [("portfolio/files/report.docx", "raw")]

    fetched = await client.get(f"/api/v1/projects/{project['id']}")
    assert fetched.json()["reports"] == []


async def test_remove_unknown_report_is_404(client, create_project, editor_headers):
    project = await create_project()
    res = await client.delete(
        f"/api/v1/projects/{project['id']}/reports/missing", headers=editor_headers,
    )
    assert res.status_code == 404


async def test_link_report_requires_url(client, create_project, editor_headers):
    project = await create_project()
    res = await client.post(
        f"/api/v1/projects/{project['id']}/reports",
        json={"title": "Post", "type": "link"}, headers=editor_headers,
    )
    assert res.status_code == 400


async def test_delete_releases_media(client, create_project, editor_headers, fake_media):
    project = await create_project(project_files=[{
        "url": "https://res.cloudinary.com/demo/image/upload/v1/spec.pdf",
        "public_id": "portfolio/files/spec",
        "original_name": "spec.pdf",
        "mime_type": "application/pdf",
    }])
    res = await client.delete(f"/api/v1/projects/{project['id']}", headers=editor_headers)
    assert res.status_code == 204
    assert fake_media.destroyed == [
        ("portfolio/images/home", "image"),
        ("portfolio/files/spec", "image"),
    ]
    assert (await client.get(f"/api/v1/projects/{project['id']}")).status_code == 404


async def test_delete_survives_media_failure(client, create_project, editor_headers, fake_media):
    fake_media.fail_destroy = True
    project = await create_project()
    res = await client.delete(f"/api/v1/projects/{project['id']}", headers=editor_headers)
    assert res.status_code == 204

async def test_health_and_root(client):
    health = await client.get("/health")
    assert health.status_code == 200
    assert health.json()["status"] == "ok"

    root = await client.get("/")
    assert root.json()["endpoints"]["products_from_pdf"] == "/api/products/from-pdf"


# News

async def test_news_with_video_upload_and_link(client):
    response = await client.post(
        "/api/news",
        data={
            "title": "Fuar 2024",
            "summary": "Stand photos",
            "content": "We attended the stone fair.",
            "video_link": "https://youtu.be/dQw4w9WgXcQ",
        },
        files={
            "image": ("stand.jpg", b"jpeg", "image/jpeg"),
            "video": ("tour.mp4", b"mp4", "video/mp4"),
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["image_path"].startswith("/images/news/")
    assert body["video_path"].startswith("/videos/news/")
    assert body["video_embed_url"] == "https://www.youtube.com/embed/dQw4w9WgXcQ"
    assert body["video_thumbnail_url"].endswith("/dQw4w9WgXcQ/maxresdefault.jpg")


async def test_news_created_at_is_settable_and_orders_list(client):
    old = await client.post("/api/news", data={"title": "Old", "created_at": "2020-05-01T09:30:00"})
    new = await client.post("/api/news", data={"title": "New"})

    assert old.json()["created_at"].startswith("2020-05-01T09:30:00")
    titles = [n["title"] for n in (await client.get("/api/news")).json()]
    assert titles == ["New", "Old"]
    assert new.json()["video_embed_url"] is None


async def test_update_and_delete_news(client):
    created = (await client.post("/api/news", data={"title": "Draft", "content": "text"})).json()

    updated = await client.put(f"/api/news/{created['id']}", data={"title": "Published"})
    assert updated.json()["title"] == "Published"
    assert updated.json()["content"] == "text"

    assert (await client.delete(f"/api/news/{created['id']}")).status_code == 200
    assert (await client.get(f"/api/news/{created['id']}")).status_code == 404


# References

async def test_reference_crud(client):
    created = await client.post(
        "/api/references",
        data={"name": "Hilton Lobby", "description": "Floor cladding", "location": "Istanbul"},
        files={"image": ("lobby.png", b"png", "image/png")},
    )
    assert created.status_code == 200
    ref = created.json()
    assert ref["image_path"].startswith("/images/references/")

    updated = await client.put(f"/api/references/{ref['id']}", data={"location": "Ankara"})
    assert updated.json()["location"] == "Ankara"
    assert updated.json()["image_path"] == ref["image_path"]

    assert len((await client.get("/api/references")).json()) == 1
    assert (await client.delete(f"/api/references/{ref['id']}")).json() == {
        "message": "Reference deleted successfully"
    }


# Categories

async def test_create_category_returns_matching_row(client):
    response = await client.post("/api/categories", json={"name": "Traverten", "description": "Travertine"})

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Traverten"
    assert body["description"] == "Travertine"
    assert body["id"] > 0


async def test_categories_sorted_by_name(client):
    for name in ("Oniks", "Granit", "Mermer"):
        await client.post("/api/categories", json={"name": name})

    names = [c["name"] for c in (await client.get("/api/categories")).json()]
    assert names == ["Granit", "Mermer", "Oniks"]


async def test_deleting_category_keeps_products(client):
    category = (await client.post("/api/categories", json={"name": "Granit"})).json()
    await client.post("/api/products", data={"name": "Absolute Black", "category": "Granit"})

    await client.delete(f"/api/categories/{category['id']}")

    products = (await client.get("/api/products")).json()
    assert products[0]["category"] == "Granit"


async def test_update_category(client):
    category = (await client.post("/api/categories", json={"name": "Mermr"})).json()

    response = await client.put(f"/api/categories/{category['id']}", json={"name": "Mermer", "description": "Marble"})

    assert response.json()["name"] == "Mermer"
    assert (await client.put("/api/categories/999", json={"name": "x"})).status_code == 404



async def test_update_category_clears_description_with_null(client):
    category = (await client.post("/api/categories", json={"name": "Granit", "description": "Hard stone"})).json()

    response = await client.put(f"/api/categories/{category['id']}", json={"name": "Granit", "description": None})

    assert response.status_code == 200
    assert response.json()["description"] is None

async def test_category_name_required(client):
    assert (await client.post("/api/categories", json={"description": "no name"})).status_code == 422


# Team

async def _member(client, **fields):
    response = await client.post("/api/team", data={"name": "Member", "position": "Engineer", **fields})
    assert response.status_code == 200
    return response.json()


async def test_team_sorted_by_sort_order(client):
    await _member(client, name="C", sort_order="2")
    await _member(client, name="A", sort_order="0")
    await _member(client, name="B", sort_order="1")

    names = [m["name"] for m in (await client.get("/api/team")).json()]
    assert names == ["A", "B", "C"]


async def test_team_tree_nests_members(client):
    ceo = await _member(client, name="Ceo", parent_id="none")
    cfo = await _member(client, name="Cfo", parent_id=str(ceo["id"]), sort_order="1")
    await _member(client, name="Accountant", parent_id=str(cfo["id"]), sort_order="2")
    await _member(client, name="Orphan", parent_id="999", sort_order="3")

    tree = (await client.get("/api/team/tree")).json()

    assert [node["name"] for node in tree] == ["Ceo", "Orphan"]
    assert tree[0]["children"][0]["name"] == "Cfo"
    assert tree[0]["children"][0]["children"][0]["name"] == "Accountant"


async def test_update_team_member_can_clear_parent(client):
    boss = await _member(client, name="Boss")
    member = await _member(client, name="Worker", parent_id=str(boss["id"]))
    assert member["parent_id"] == boss["id"]

    response = await client.put(f"/api/team/{member['id']}", data={"parent_id": "none", "position": "Lead"})

    assert response.json()["parent_id"] is None
    assert response.json()["position"] == "Lead"


async def test_invalid_parent_id(client):
    response = await client.post("/api/team", data={"name": "X", "parent_id": "abc"})
    assert response.status_code == 422


async def test_team_member_image_upload(client):
    response = await client.post(
        "/api/team",
        data={"name": "Ayşe", "department": "Sales"},
        files={"image": ("ayse.jpg", b"jpeg", "image/jpeg")},
    )
    assert response.json()["image_path"].startswith("/images/team/")


# Messages

async def test_contact_messages_flow(client):
    created = await client.post(
        "/api/messages",
        json={"name": "Ali", "email": "ali@acmadencilik.com.tr", "message": "Price list please"},
    )
    assert created.status_code == 200
    message = created.json()
    assert message["is_read"] is False

    read = await client.patch(f"/api/messages/{message['id']}/read")
    assert read.json()["is_read"] is True

    assert len((await client.get("/api/messages")).json()) == 1
    assert (await client.delete(f"/api/messages/{message['id']}")).status_code == 200
    assert (await client.get("/api/messages")).json() == []


async def test_contact_message_requires_valid_email(client):
    response = await client.post("/api/messages", json={"name": "Ali", "email": "nope", "message": "Hi"})
    assert response.status_code == 422


# Company info

async def test_company_info_defaults_and_partial_update(client):
    info = (await client.get("/api/company-info")).json()
    assert info["name"] == "AC Madencilik"
    assert info["founded_year"] == 2008

    updated = await client.put("/api/company-info", json={"phone": "+90 266 000 00 00"})

    assert updated.status_code == 200
    assert updated.json()["phone"] == "+90 266 000 00 00"
    assert updated.json()["name"] == "AC Madencilik"


async def test_company_info_null_clears_field(client):
    response = await client.put("/api/company-info", json={"email": None})

    assert response.status_code == 200
    assert response.json()["email"] is None
    assert response.json()["phone"] == "+90 266 715 42 80"


async def test_company_info_name_cannot_be_null(client):
    assert (await client.put("/api/company-info", json={"name": None})).status_code == 422


# Admin

async def test_login(client):
    ok = await client.post("/api/auth/login", json={"username": "admin", "password": "admin123"})
    assert ok.json() == {"success": True}

    bad = await client.post("/api/auth/login", json={"username": "admin", "password": "wrong"})
    assert bad.status_code == 401


async def test_generic_upload(client):
    response = await client.post("/api/upload", files={"image": ("logo.png", b"png", "image/png")})
    assert response.status_code == 200
    assert response.json()["imageUrl"].startswith("/images/uploads/")

    missing = await client.post("/api/upload")
    assert missing.status_code == 400

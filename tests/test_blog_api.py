from bson import ObjectId

from silver_talent.services import blog_service as blog_service_module

IMAGE = ("cover.png", b"\x89PNG image", "image/png")


def post_form(category, **overrides):
    data = {
        "title": "Remote Jobs",
        "excerpt": "How to land one.",
        "content": "First paragraph.\n\nSecond paragraph.",
        "author": "Editorial Team",
        "readTime": "4 min",
        "categoryId": str(category["_id"]),
        "tags": "remote, tips",
        "isPublished": "true",
    }
    data.update(overrides)
    return data


def create_post(client, category, image=IMAGE, **overrides):
    files = {"featuredImageFile": image} if image else None
    return client.post("/api/blog/posts", data=post_form(category, **overrides), files=files)


# ---------- categories ----------

def test_create_category_generates_slug(client, db):
    resp = client.post("/api/blog/categories", json={"name": "Remote Jobs", "description": "Work anywhere"})
    assert resp.status_code == 201
    assert resp.json()["category"]["slug"] == "remote-jobs"


def test_duplicate_category_name_conflicts(client, db):
    client.post("/api/blog/categories", json={"name": "Remote Jobs"})
    resp = client.post("/api/blog/categories", json={"name": "Remote Jobs"})
    assert resp.status_code == 409
    assert db.blog_categories.count_documents({}) == 1


def test_category_name_required(client):
    resp = client.post("/api/blog/categories", json={"name": "   "})
    assert resp.status_code == 400


def test_categories_sorted_by_name(client, db, category):
    client.post("/api/blog/categories", json={"name": "Announcements"})
    names = [c["name"] for c in client.get("/api/blog/categories").json()]
    assert names == ["Announcements", "Career Advice"]


def test_rename_category_refreshes_slug(client, category):
    resp = client.put(f"/api/blog/categories/{category['_id']}", json={"name": "Career Tips"})
    assert resp.status_code == 200
    assert resp.json()["category"]["slug"] == "career-tips"


def test_update_category_to_taken_name(client, category):
    other = client.post("/api/blog/categories", json={"name": "Announcements"}).json()["category"]
    resp = client.put(f"/api/blog/categories/{other['_id']}", json={"name": "Career Advice"})
    assert resp.status_code == 409


def test_delete_category_in_use(client, db, category):
    create_post(client, category)
    resp = client.delete(f"/api/blog/categories/{category['_id']}")
    assert resp.status_code == 400
    assert "1 post(s)" in resp.json()["message"]
    assert db.blog_categories.find_one({"_id": category["_id"]}) is not None


def test_delete_unused_category(client, db, category):
    resp = client.delete(f"/api/blog/categories/{category['_id']}")
    assert resp.status_code == 200
    assert db.blog_categories.count_documents({}) == 0
    assert client.delete(f"/api/blog/categories/{category['_id']}").status_code == 404


# ---------- posts ----------

def test_create_post(client, db, category, media):
    resp = create_post(client, category)
    assert resp.status_code == 201
    post = resp.json()["post"]
    assert post["slug"] == "remote-jobs"
    assert post["content"] == ["First paragraph.", "Second paragraph."]
    assert post["tags"] == ["remote", "tips"]
    assert post["category"]["slug"] == "career-advice"
    assert post["featuredImage"]["url"].startswith("https://media.test/silver_talent/blog_images/")
    assert post["publishDate"] is not None
    assert post["views"] == 0


def test_same_title_gets_distinct_slugs(client, category):
    first = create_post(client, category).json()["post"]
    second = create_post(client, category).json()["post"]
    assert first["slug"] == "remote-jobs"
    assert second["slug"] == "remote-jobs-1"


def test_create_post_requires_image(client, db, category):
    resp = create_post(client, category, image=None)
    assert resp.status_code == 400
    assert db.blog_posts.count_documents({}) == 0


def test_create_post_unknown_category(client, db, category):
    resp = create_post(client, category, categoryId=str(ObjectId()))
    assert resp.status_code == 404


def test_create_post_upload_failure(client, db, category, media):
    media.fail_upload = True
    resp = create_post(client, category)
    assert resp.status_code == 500
    assert db.blog_posts.count_documents({}) == 0


def test_create_post_missing_fields(client, category):
    resp = create_post(client, category, excerpt="", author="")
    assert resp.status_code == 400
    assert set(resp.json()["errors"]) == {"excerpt", "author"}


def test_listing_public_vs_admin(client, category):
    create_post(client, category, title="Published Post")
    create_post(client, category, title="Draft Post", isPublished="false")

    public = client.get("/api/blog/posts").json()
    assert [p["title"] for p in public["posts"]] == ["Published Post"]
    assert public["totalCount"] == 1

    admin = client.get("/api/blog/posts", params={"admin_view": "true"}).json()
    assert [p["title"] for p in admin["posts"]] == ["Draft Post", "Published Post"]


def test_listing_filters(client, db, category):
    other = client.post("/api/blog/categories", json={"name": "News"}).json()["category"]
    create_post(client, category, title="Resume Tips", tags="resume")
    create_post(client, category, title="Interview Prep", tags="interview", excerpt="Be ready.",
                content="Practice answers.")
    create_post(client, {"_id": other["_id"]}, title="Office Opening", tags="company")

    by_category = client.get("/api/blog/posts", params={"category": "news"}).json()
    assert [p["title"] for p in by_category["posts"]] == ["Office Opening"]

    by_tag = client.get("/api/blog/posts", params={"tag": "resume"}).json()
    assert [p["title"] for p in by_tag["posts"]] == ["Resume Tips"]

    by_search = client.get("/api/blog/posts", params={"search": "practice"}).json()
    assert [p["title"] for p in by_search["posts"]] == ["Interview Prep"]

    unknown = client.get("/api/blog/posts", params={"category": "no-such-category"}).json()
    assert unknown["posts"] == []
    assert unknown["totalCount"] == 0


def test_get_by_slug_counts_views(client, db, category):
    create_post(client, category)
    client.get("/api/blog/posts/slug/remote-jobs")
    resp = client.get("/api/blog/posts/slug/remote-jobs")
    assert resp.status_code == 200
    assert resp.json()["views"] == 2
    assert resp.json()["category"]["name"] == "Career Advice"


def test_get_unpublished_by_slug(client, db, category):
    create_post(client, category, isPublished="false")
    resp = client.get("/api/blog/posts/slug/remote-jobs")
    assert resp.status_code == 404
    assert db.blog_posts.find_one({"slug": "remote-jobs"})["views"] == 0


def test_admin_fetch_sees_drafts_without_counting(client, db, category):
    post = create_post(client, category, isPublished="false").json()["post"]
    resp = client.get(f"/api/blog/posts/{post['_id']}")
    assert resp.status_code == 200
    assert resp.json()["views"] == 0


def test_publish_date_transitions(client, db, category):
    post = create_post(client, category, isPublished="false").json()["post"]
    assert post["publishDate"] is None
    post_oid = ObjectId(post["_id"])

    client.put(f"/api/blog/posts/{post['_id']}", data=post_form(category))
    first_published = db.blog_posts.find_one({"_id": post_oid})["publishDate"]
    assert first_published is not None

    # Staying published keeps the first publish date
    client.put(f"/api/blog/posts/{post['_id']}", data=post_form(category, excerpt="Edited."))
    assert db.blog_posts.find_one({"_id": post_oid})["publishDate"] == first_published

    unpublished = client.put(f"/api/blog/posts/{post['_id']}",
                             data=post_form(category, isPublished="false")).json()["post"]
    assert unpublished["publishDate"] is None


def test_update_keeps_slug_until_title_changes(client, db, category):
    post = create_post(client, category).json()["post"]
    same = client.put(f"/api/blog/posts/{post['_id']}", data=post_form(category, excerpt="New.")).json()["post"]
    assert same["slug"] == "remote-jobs"

    renamed = client.put(f"/api/blog/posts/{post['_id']}",
                         data=post_form(category, title="Hybrid Jobs")).json()["post"]
    assert renamed["slug"] == "hybrid-jobs"


def test_update_image_replaces_old(client, db, category, media):
    post = create_post(client, category).json()["post"]
    old_id = post["featuredImage"]["public_id"]
    resp = client.put(f"/api/blog/posts/{post['_id']}", data=post_form(category),
                      files={"featuredImageFile": IMAGE})
    assert resp.status_code == 200
    assert resp.json()["post"]["featuredImage"]["public_id"] != old_id
    assert media.deleted == [old_id]


def test_update_image_failure_keeps_old(client, db, category, media):
    post = create_post(client, category).json()["post"]
    media.fail_upload = True
    resp = client.put(f"/api/blog/posts/{post['_id']}", data=post_form(category, title="Renamed"),
                      files={"featuredImageFile": IMAGE})
    assert resp.status_code == 200
    updated = resp.json()["post"]
    assert updated["featuredImage"] == post["featuredImage"]
    assert updated["title"] == "Renamed"
    assert media.deleted == []


def test_remove_featured_image(client, db, category, media):
    post = create_post(client, category).json()["post"]
    resp = client.put(f"/api/blog/posts/{post['_id']}", data=post_form(category, removeFeaturedImage="true"))
    assert resp.json()["post"]["featuredImage"] is None
    assert media.deleted == [post["featuredImage"]["public_id"]]


def test_delete_post(client, db, category, media):
    post = create_post(client, category).json()["post"]
    media.fail_delete = True
    resp = client.delete(f"/api/blog/posts/{post['_id']}")
    assert resp.status_code == 200
    assert db.blog_posts.count_documents({}) == 0
    assert client.delete(f"/api/blog/posts/{post['_id']}").status_code == 404


# ---------- unique index backstop ----------

def reuse_slug(slug):
    """Slug assignment that lost a race with a concurrent save"""
    def assign(collection, doc, source_field, previous=None, fallback="item"):
        doc["slug"] = slug
        return doc
    return assign


def test_category_slug_race_conflicts(client, db, category, monkeypatch):
    monkeypatch.setattr(blog_service_module, "assign_slug", reuse_slug("career-advice"))
    resp = client.post("/api/blog/categories", json={"name": "Careers"})
    assert resp.status_code == 409
    assert db.blog_categories.count_documents({}) == 1
    assert db.blog_categories.find_one({"name": "Careers"}) is None


def test_post_slug_race_conflicts(client, db, category, monkeypatch):
    create_post(client, category)
    monkeypatch.setattr(blog_service_module, "assign_slug", reuse_slug("remote-jobs"))
    resp = create_post(client, category, title="Remote Work")
    assert resp.status_code == 409
    assert db.blog_posts.count_documents({}) == 1
    assert db.blog_posts.find_one({"title": "Remote Work"}) is None


def test_post_rename_into_taken_slug_conflicts(client, db, category, monkeypatch):
    create_post(client, category)
    other = create_post(client, category, title="Hybrid Jobs").json()["post"]
    monkeypatch.setattr(blog_service_module, "assign_slug", reuse_slug("remote-jobs"))
    resp = client.put(f"/api/blog/posts/{other['_id']}", data=post_form(category, title="Remote Work"))
    assert resp.status_code == 409
    assert db.blog_posts.find_one({"_id": ObjectId(other["_id"])})["title"] == "Hybrid Jobs"

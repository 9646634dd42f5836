# silver_talent/services/blog_service.py
import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException
from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from silver_talent.config import Config
from silver_talent.database.mongodb import MongoDB, parse_object_id, serialize_doc, utcnow
from silver_talent.models.blog import BlogCategory, BlogCategoryPayload, BlogPost
from silver_talent.services.listing import build_post_listing, paginate
from silver_talent.services.media import MediaStoreError, UploadedFile, delete_quietly
from silver_talent.services.slugs import assign_slug
from silver_talent.services.validation import as_bool, clean, require_fields, split_list, split_paragraphs

logger = logging.getLogger(__name__)

REQUIRED_POST_FIELDS = ("title", "excerpt", "content", "author", "readTime", "categoryId")


class BlogService:
    def __init__(self, db: MongoDB, media_store):
        self.db = db
        self.media_store = media_store

    # ---------- categories ----------

    def get_all_categories(self):
        return serialize_doc(list(self.db.blog_categories.find().sort("name", ASCENDING)))

    def get_category(self, category_id: str) -> Dict:
        return serialize_doc(self.db.get_by_id(self.db.blog_categories, category_id, "Category"))

    def _save_category(self, doc: Dict, previous: Optional[Dict] = None) -> Dict:
        assign_slug(self.db.blog_categories, doc, "name", previous=previous, fallback="category")
        try:
            if previous is None:
                doc["_id"] = self.db.blog_categories.insert_one(doc).inserted_id
            else:
                self.db.blog_categories.replace_one({"_id": doc["_id"]}, doc)
        except DuplicateKeyError:
            raise HTTPException(status_code=409, detail="A category with this name or slug already exists.")
        return doc

    def create_category(self, payload: BlogCategoryPayload) -> Dict:
        name = clean(payload.name)
        if not name:
            raise HTTPException(status_code=400, detail="Category name is required.")
        if self.db.blog_categories.find_one({"name": name}, {"_id": 1}):
            raise HTTPException(status_code=409, detail="A category with this name already exists.")

        now = utcnow()
        doc = BlogCategory(name=name, description=clean(payload.description) or "",
                           createdAt=now, updatedAt=now).model_dump()
        self._save_category(doc)
        logger.info(f"Blog category created: {name} ({doc['slug']})")
        return {"message": "Blog category created successfully.", "category": serialize_doc(doc)}

    def update_category(self, category_id: str, payload: BlogCategoryPayload) -> Dict:
        name = clean(payload.name)
        if not name:
            raise HTTPException(status_code=400, detail="Category name is required for update.")
        existing = self.db.get_by_id(self.db.blog_categories, category_id, "Category")
        if self.db.blog_categories.find_one({"name": name, "_id": {"$ne": existing["_id"]}}, {"_id": 1}):
            raise HTTPException(status_code=409, detail="Another category with this name already exists.")

        doc = dict(existing, name=name, description=clean(payload.description) or "", updatedAt=utcnow())
        self._save_category(doc, previous=existing)
        return {"message": "Blog category updated successfully.", "category": serialize_doc(doc)}

    def delete_category(self, category_id: str) -> Dict:
        category_oid = parse_object_id(category_id, "Category")
        posts_in_category = self.db.blog_posts.count_documents({"category": category_oid})
        if posts_in_category > 0:
            raise HTTPException(
                status_code=400,
                detail=f"Cannot delete category. {posts_in_category} post(s) are currently assigned to it. Please reassign them first.",
            )
        result = self.db.blog_categories.delete_one({"_id": category_oid})
        if not result.deleted_count:
            raise HTTPException(status_code=404, detail="Category not found.")
        return {"message": "Blog category deleted successfully.", "categoryId": category_id}

    # ---------- posts ----------

    def _populate_category(self, post: Dict) -> Dict:
        if post.get("category") is not None:
            post["category"] = self.db.blog_categories.find_one(
                {"_id": post["category"]}, {"name": 1, "slug": 1}
            ) or post["category"]
        return post

    def _require_category(self, category_id: str):
        category_oid = parse_object_id(category_id, "Blog category")
        if not self.db.blog_categories.find_one({"_id": category_oid}, {"_id": 1}):
            raise HTTPException(status_code=404, detail="Blog category not found.")
        return category_oid

    def _save_post(self, doc: Dict, previous: Optional[Dict] = None) -> Dict:
        assign_slug(self.db.blog_posts, doc, "title", previous=previous, fallback="post")
        try:
            if previous is None:
                doc["_id"] = self.db.blog_posts.insert_one(doc).inserted_id
            else:
                self.db.blog_posts.replace_one({"_id": doc["_id"]}, doc)
        except DuplicateKeyError:
            raise HTTPException(status_code=409, detail="A blog post with this slug already exists.")
        return doc

    def get_all_posts(self, category: Optional[str] = None, tag: Optional[str] = None,
                      search: Optional[str] = None, page: Any = 1, limit: Any = None,
                      admin_view: Any = None) -> Dict:
        listing = build_post_listing(self.db.blog_categories, category=category, tag=tag, search=search,
                                     page=page, limit=limit, admin_view=admin_view)
        return paginate(self.db.blog_posts, listing, "posts", transform=self._populate_category)

    def get_post_for_admin(self, post_id: str) -> Dict:
        post = self.db.get_by_id(self.db.blog_posts, post_id, "Blog post")
        return serialize_doc(self._populate_category(post))

    def get_post_by_slug(self, slug: str) -> Dict:
        """Public single-post fetch; counts a view atomically"""
        post = self.db.blog_posts.find_one_and_update(
            {"slug": slug, "isPublished": True},
            {"$inc": {"views": 1}},
            return_document=ReturnDocument.AFTER,
        )
        if not post:
            raise HTTPException(status_code=404, detail="Blog post not found or not published.")
        return serialize_doc(self._populate_category(post))

    def _upload_image(self, image_file: UploadedFile) -> Dict[str, str]:
        return self.media_store.upload(image_file.content, image_file.filename or "image", Config.BLOG_IMAGES_FOLDER)

    def create_post(self, fields: Dict[str, Any], image_file: Optional[UploadedFile]) -> Dict:
        values = require_fields({name: fields.get(name) for name in REQUIRED_POST_FIELDS})
        category_oid = self._require_category(values["categoryId"])
        if image_file is None:
            raise HTTPException(status_code=400, detail="Featured image is required for new post.")
        try:
            featured_image = self._upload_image(image_file)
        except MediaStoreError as e:
            logger.error(f"Image upload error during create: {e}")
            raise HTTPException(status_code=500, detail="Failed to upload featured image.")

        published = as_bool(fields.get("isPublished"))
        now = utcnow()
        doc = BlogPost(
            title=values["title"],
            excerpt=values["excerpt"],
            content=split_paragraphs(fields.get("content")),
            author=values["author"],
            readTime=values["readTime"],
            featuredImage=featured_image,
            category=category_oid,
            tags=split_list(fields.get("tags")),
            isPublished=published,
            publishDate=now if published else None,
            createdAt=now,
            updatedAt=now,
        ).model_dump()
        self._save_post(doc)
        logger.info(f"Blog post saved: {doc['title']} Slug: {doc['slug']}")
        return {"success": True, "message": "Blog post created successfully!",
                "post": serialize_doc(self._populate_category(doc))}

    def update_post(self, post_id: str, fields: Dict[str, Any], image_file: Optional[UploadedFile] = None,
                    remove_image: bool = False) -> Dict:
        existing = self.db.get_by_id(self.db.blog_posts, post_id, "Blog post")
        values = require_fields({name: fields.get(name) for name in REQUIRED_POST_FIELDS})
        category_oid = self._require_category(values["categoryId"])

        doc = dict(existing)
        doc.update(
            title=values["title"],
            excerpt=values["excerpt"],
            content=split_paragraphs(fields.get("content")),
            author=values["author"],
            readTime=values["readTime"],
            category=category_oid,
            tags=split_list(fields.get("tags")),
            updatedAt=utcnow(),
        )

        published = as_bool(fields.get("isPublished"))
        if published and not existing.get("isPublished"):
            doc["publishDate"] = utcnow()
        elif not published:
            doc["publishDate"] = None
        doc["isPublished"] = published

        previous_image = existing.get("featuredImage") or {}
        if image_file is not None:
            try:
                doc["featuredImage"] = self._upload_image(image_file)
                delete_quietly(self.media_store, previous_image, "while replacing featured image ")
            except MediaStoreError as e:
                # Keep the previous image, the rest of the update still applies
                logger.error(f"Image upload error during update: {e}")
        elif remove_image:
            delete_quietly(self.media_store, previous_image, "on remove request ")
            doc["featuredImage"] = None

        self._save_post(doc, previous=existing)
        logger.info(f"Blog post updated: {doc['title']} New Slug: {doc['slug']}")
        return {"success": True, "message": "Blog post updated successfully!",
                "post": serialize_doc(self._populate_category(doc))}

    def delete_post(self, post_id: str) -> Dict:
        post = self.db.get_by_id(self.db.blog_posts, post_id, "Blog post")
        delete_quietly(self.media_store, post.get("featuredImage"), "for deleted post ")
        self.db.blog_posts.delete_one({"_id": post["_id"]})
        return {"success": True, "message": "Blog post deleted successfully!", "postId": post_id}

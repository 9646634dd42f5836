# silver_talent/api/routes/blog.py
from fastapi import APIRouter, Depends, UploadFile, File, Form
from fastapi.concurrency import run_in_threadpool
from typing import Optional

from silver_talent.dependencies import get_blog_service
from silver_talent.models.blog import BlogCategoryPayload
from silver_talent.services.blog_service import BlogService
from silver_talent.services.media import read_upload
from silver_talent.services.validation import as_bool

router = APIRouter()

# --- Blog posts ---

@router.get("/blog/posts")
def get_all_blog_posts(
    category: Optional[str] = None,
    tag: Optional[str] = None,
    search: Optional[str] = None,
    page: Optional[str] = "1",
    limit: Optional[str] = "10",
    admin_view: Optional[str] = None,
    blog_service: BlogService = Depends(get_blog_service),
):
    return blog_service.get_all_posts(category, tag, search, page, limit, admin_view)


@router.get("/blog/posts/slug/{slug}")
def get_blog_post_by_slug(slug: str, blog_service: BlogService = Depends(get_blog_service)):
    return blog_service.get_post_by_slug(slug)


@router.get("/blog/posts/{post_id}")
def get_blog_post_for_admin(post_id: str, blog_service: BlogService = Depends(get_blog_service)):
    return blog_service.get_post_for_admin(post_id)


@router.post("/blog/posts", status_code=201)
async def create_blog_post(
    title: Optional[str] = Form(None),
    excerpt: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    author: Optional[str] = Form(None),
    readTime: Optional[str] = Form(None),
    categoryId: Optional[str] = Form(None),
    tags: Optional[str] = Form(None),
    isPublished: Optional[str] = Form("false"),
    featuredImageFile: Optional[UploadFile] = File(None),
    blog_service: BlogService = Depends(get_blog_service),
):
    fields = dict(title=title, excerpt=excerpt, content=content, author=author, readTime=readTime,
                  categoryId=categoryId, tags=tags, isPublished=isPublished)
    image = await read_upload(featuredImageFile)
    return await run_in_threadpool(blog_service.create_post, fields, image)


@router.put("/blog/posts/{post_id}")
async def update_blog_post(
    post_id: str,
    title: Optional[str] = Form(None),
    excerpt: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    author: Optional[str] = Form(None),
    readTime: Optional[str] = Form(None),
    categoryId: Optional[str] = Form(None),
    tags: Optional[str] = Form(None),
    isPublished: Optional[str] = Form("false"),
    removeFeaturedImage: Optional[str] = Form(None),
    featuredImageFile: Optional[UploadFile] = File(None),
    blog_service: BlogService = Depends(get_blog_service),
):
    fields = dict(title=title, excerpt=excerpt, content=content, author=author, readTime=readTime,
                  categoryId=categoryId, tags=tags, isPublished=isPublished)
    image = await read_upload(featuredImageFile)
    return await run_in_threadpool(blog_service.update_post, post_id, fields, image,
                                   remove_image=as_bool(removeFeaturedImage))


@router.delete("/blog/posts/{post_id}")
def delete_blog_post(post_id: str, blog_service: BlogService = Depends(get_blog_service)):
    return blog_service.delete_post(post_id)

# --- Blog categories ---

@router.get("/blog/categories")
def get_all_blog_categories(blog_service: BlogService = Depends(get_blog_service)):
    return blog_service.get_all_categories()


@router.post("/blog/categories", status_code=201)
def create_blog_category(payload: BlogCategoryPayload, blog_service: BlogService = Depends(get_blog_service)):
    return blog_service.create_category(payload)


@router.get("/blog/categories/{category_id}")
def get_blog_category(category_id: str, blog_service: BlogService = Depends(get_blog_service)):
    return blog_service.get_category(category_id)


@router.put("/blog/categories/{category_id}")
def update_blog_category(category_id: str, payload: BlogCategoryPayload,
                               blog_service: BlogService = Depends(get_blog_service)):
    return blog_service.update_category(category_id, payload)


@router.delete("/blog/categories/{category_id}")
def delete_blog_category(category_id: str, blog_service: BlogService = Depends(get_blog_service)):
    return blog_service.delete_category(category_id)

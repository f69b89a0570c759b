import json
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status

from blogcms.core.errors import NotFound, ValidationError, server_error
from blogcms.database.connection import BlogStore, get_store
from blogcms.models.schemas import BlogPost, BlogWrite, MessageResponse
from blogcms.utils.cloudinary_upload import CloudinaryUploader, get_uploader

logger = logging.getLogger(__name__)

router = APIRouter()


def parse_tags(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    try:
        tags = json.loads(raw)
    except ValueError as e:
        raise server_error(e, "Parsing tags")
    if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
        raise server_error(TypeError(f"tags must be a JSON array of strings, got {raw!r}"), "Parsing tags")
    return tags


def _optional_text(value: Optional[str]) -> Optional[str]:
    return value if value and value.strip() else None


def parse_blog_form(
    title: Optional[str],
    content: Optional[str],
    titleEng: Optional[str],
    contentEng: Optional[str],
    tags: Optional[str],
    require_english: bool = False,
) -> BlogWrite:
    required = {"title": title, "content": content}
    if require_english:
        required.update({"titleEng": titleEng, "contentEng": contentEng})
    missing = [name for name, value in required.items() if not value or not value.strip()]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    return BlogWrite(
        title=title,
        content=content,
        titleEng=_optional_text(titleEng),
        contentEng=_optional_text(contentEng),
        tags=parse_tags(tags),
    )


def slug_to_title(slug: str) -> str:
    # the path segment arrives already percent-decoded
    return slug.replace("-", " ")


def _has_file(image: Optional[UploadFile]) -> bool:
    # browsers send an empty part when the file input is left blank
    return image is not None and bool(image.filename)


@router.get("", response_model=List[BlogPost])
def list_blogs(store: BlogStore = Depends(get_store)):
    return store.list()


@router.get("/title/{slug}", response_model=BlogPost)
def get_blog_by_title(slug: str, store: BlogStore = Depends(get_store)):
    post = store.get_by_title(slug_to_title(slug))
    if not post:
        raise NotFound()
    return post


@router.get("/{blog_id}", response_model=BlogPost)
def get_blog(blog_id: str, store: BlogStore = Depends(get_store)):
    post = store.get(blog_id)
    if not post:
        raise NotFound()
    return post


@router.post("", response_model=BlogPost, status_code=status.HTTP_201_CREATED)
def create_blog(
    request: Request,
    title: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    titleEng: Optional[str] = Form(None),
    contentEng: Optional[str] = Form(None),
    tags: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    store: BlogStore = Depends(get_store),
    uploader: CloudinaryUploader = Depends(get_uploader),
):
    data = parse_blog_form(
        title, content, titleEng, contentEng, tags,
        require_english=request.app.state.settings.require_english,
    )
    image_url = uploader.upload(image) if _has_file(image) else None

    post = store.create(data, image=image_url)
    logger.info(f"Created post {post.id} ({post.title!r})")
    return post


@router.put("/{blog_id}", response_model=BlogPost)
def update_blog(
    blog_id: str,
    request: Request,
    title: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    titleEng: Optional[str] = Form(None),
    contentEng: Optional[str] = Form(None),
    tags: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    store: BlogStore = Depends(get_store),
    uploader: CloudinaryUploader = Depends(get_uploader),
):
    data = parse_blog_form(
        title, content, titleEng, contentEng, tags,
        require_english=request.app.state.settings.require_english,
    )
    if not store.exists(blog_id):
        raise NotFound()
    image_url = uploader.upload(image) if _has_file(image) else None

    post = store.replace(blog_id, data, image=image_url)
    if not post:
        raise NotFound()
    logger.info(f"Updated post {blog_id}")
    return post


@router.delete("/{blog_id}", response_model=MessageResponse)
def delete_blog(blog_id: str, store: BlogStore = Depends(get_store)):
    if not store.delete(blog_id):
        raise NotFound()
    logger.info(f"Deleted post {blog_id}")
    return {"message": "Post deleted"}

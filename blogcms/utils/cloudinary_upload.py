import logging
import os

import cloudinary.uploader
from fastapi import Request, UploadFile

from blogcms.core.config import Settings
from blogcms.core.errors import PayloadTooLarge, ValidationError, server_error

logger = logging.getLogger(__name__)

ALLOWED_FORMATS = ["jpg", "jpeg", "png", "webp"]
ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/png", "image/webp"}


def is_allowed_image(file: UploadFile) -> bool:
    ext = os.path.splitext(file.filename or "")[1].lstrip(".").lower()
    if ext:
        return ext in ALLOWED_FORMATS
    return file.content_type in ALLOWED_CONTENT_TYPES


class CloudinaryUploader:
    """Uploads post images to Cloudinary, shrinking them to fit the configured box."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def read_limited(self, file: UploadFile) -> bytes:
        """Read the upload, refusing anything over ``max_upload_bytes``."""
        limit = self.settings.max_upload_bytes
        contents = file.file.read(limit + 1)
        if len(contents) > limit:
            raise PayloadTooLarge(f"Image exceeds the {limit // (1024 * 1024)} MB limit")
        return contents

    def upload(self, file: UploadFile) -> str:
        """
        Upload an image to Cloudinary and return its secure URL
        """
        if not is_allowed_image(file):
            raise ValidationError("Unsupported image format, use jpg, png or webp")
        contents = self.read_limited(file)

        try:
            result = cloudinary.uploader.upload(
                contents,
                folder=self.settings.cloudinary_folder,
                resource_type="image",
                allowed_formats=ALLOWED_FORMATS,
                transformation=[{
                    "width": self.settings.image_max_width,
                    "height": self.settings.image_max_height,
                    "crop": "limit",
                }],
                cloud_name=self.settings.cloudinary_cloud_name,
                api_key=self.settings.cloudinary_api_key,
                api_secret=self.settings.cloudinary_api_secret,
            )
        except Exception as e:
            raise server_error(e, "Image upload")

        url = result.get("secure_url")
        if not url:
            raise server_error(ValueError(f"no secure_url in response {result!r}"), "Image upload")
        logger.info(f"Uploaded {file.filename} to Cloudinary as {result.get('public_id')}")
        return url


# FastAPI dependency
def get_uploader(request: Request) -> CloudinaryUploader:
    return request.app.state.uploader

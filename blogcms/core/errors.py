"""
Error types returned by the API.

Every route raises one of these; a single exception handler in
``blogcms.main`` turns them into ``{"error": ..., "message": ...}`` responses.
"""

import logging
import uuid

from fastapi import status

logger = logging.getLogger(__name__)


class BlogAPIError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Server error"

    def __init__(self, message: str = None):
        self.message = message or self.message
        super().__init__(self.message)


class ValidationError(BlogAPIError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Missing required fields"


class NotFound(BlogAPIError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Post not found"


class PayloadTooLarge(BlogAPIError):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    message = "Uploaded file is too large"


class ServerError(BlogAPIError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Server error"


def server_error(error: Exception, context: str) -> ServerError:
    """
    Log the full error server-side and return a ServerError safe to show the client.

    The client message only carries a short id that can be matched
    against the logged traceback.
    """
    error_id = str(uuid.uuid4())[:8]
    logger.error(
        f"{context} failed [{error_id}]: {type(error).__name__}: {error}",
        exc_info=error,
    )
    return ServerError(f"{context} failed (Error ID: {error_id})")

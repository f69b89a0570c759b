import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pymongo.errors import PyMongoError

from blogcms.blog.routes import router as blog_router
from blogcms.core.config import Settings
from blogcms.core.errors import BlogAPIError, server_error
from blogcms.core.logger import setup_logging
from blogcms.database.connection import BlogStore, connect
from blogcms.models.schemas import ErrorResponse
from blogcms.translate.client import DeepLTranslator
from blogcms.translate.routes import router as translate_router
from blogcms.utils.cloudinary_upload import CloudinaryUploader

logger = logging.getLogger(__name__)


def _error_response(exc: BlogAPIError) -> JSONResponse:
    body = ErrorResponse(error=type(exc).__name__, message=exc.message)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


def create_app(settings: Optional[Settings] = None, client_factory=connect, translate_transport=None) -> FastAPI:
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = client_factory(settings)
        app.state.store = BlogStore.from_client(client, settings)
        logger.info(f"Using MongoDB database {settings.mongo_db_name!r}")
        try:
            yield
        finally:
            client.close()

    app = FastAPI(title="Blog CMS API", lifespan=lifespan)
    app.state.settings = settings
    app.state.uploader = CloudinaryUploader(settings)
    app.state.translator = DeepLTranslator(settings, transport=translate_transport)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(BlogAPIError)
    async def blog_error_handler(request: Request, exc: BlogAPIError):
        return _error_response(exc)

    @app.exception_handler(PyMongoError)
    async def store_error_handler(request: Request, exc: PyMongoError):
        return _error_response(server_error(exc, f"{request.method} {request.url.path}"))

    # Custom exception handler to prevent binary data in error responses
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = []
        for error in exc.errors():
            error_dict = {
                "loc": error["loc"],
                "msg": error["msg"],
                "type": error["type"]
            }
            # Don't include the actual input data if it might be binary
            if "input" in error and error["loc"][-1] != "image":
                error_dict["input"] = error["input"]
            errors.append(error_dict)

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "ValidationError", "message": "Invalid request", "detail": errors}
        )

    app.include_router(blog_router, prefix="/api/blogs", tags=["blogs"])
    app.include_router(translate_router, prefix="/api", tags=["translate"])

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return "Blog CMS API running, see /docs for the available endpoints."

    return app


app = create_app()

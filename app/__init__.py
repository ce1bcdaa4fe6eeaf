"""Application factory and top-level wiring for ProjeX Manager.

``create_app`` brings together configuration, database setup, templates,
routers and error handling. The module-level ``app`` is what uvicorn serves.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .core.errors import http_exception_handler, validation_exception_handler
from .db.migrate import run_migrations
from .db.session import Base, engine
from .middlewares import RequestIdMiddleware, SecurityHeadersMiddleware

# Importing the models registers their tables with ``Base.metadata``.
from .models import project as _project  # noqa: F401
from .models import task as _task  # noqa: F401


def create_app(*, init_db: bool = True) -> FastAPI:
    application = FastAPI(title=settings.APP_NAME)
    application.mount("/static", StaticFiles(directory=str(settings.STATIC_DIR)), name="static")

    if init_db:
        # ``create_all`` covers new databases; ``run_migrations`` upgrades old ones.
        Base.metadata.create_all(bind=engine)
        run_migrations(engine)

    application.add_middleware(SecurityHeadersMiddleware)
    application.add_middleware(RequestIdMiddleware)

    from .routers import api_projects as api_projects_router
    from .routers import ui as ui_router

    application.include_router(ui_router.router)
    application.include_router(api_projects_router.router)

    application.add_exception_handler(StarletteHTTPException, http_exception_handler)
    application.add_exception_handler(RequestValidationError, validation_exception_handler)
    return application


app = create_app()


__all__ = ["app", "create_app"]

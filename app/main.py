from prometheus_fastapi_instrumentator import Instrumentator

from app.core.config import settings
from app.core.logging import configure_logging
from . import app as base_app

configure_logging(settings.LOG_LEVEL, json_format=settings.LOG_JSON)
app = base_app
Instrumentator().instrument(app).expose(app, include_in_schema=False)


@app.get("/health")
async def health() -> dict[str, bool]:
    return {"ok": True}

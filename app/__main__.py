"""``python -m app`` serves the UI and API with uvicorn."""

from __future__ import annotations

import uvicorn

from .core.config import settings


def main() -> None:
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()

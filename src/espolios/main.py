from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from .api.routers import router as espolios_router
from .config import settings
from .container import get_app_container
from .observability.logging_setup import setup_logging

# Configure logging from settings (LOG_LEVEL in .env)
setup_logging()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    # Missing storage settings raise here, before any request is served
    container = get_app_container()
    yield
    container.close()


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.include_router(espolios_router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "ok"}


def run() -> None:
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()

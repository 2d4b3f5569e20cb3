import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from comics import repository as comics_repository
from comics import router as comics_router
from core import settings
from core.errors import register_exception_handlers
from core.log import configure_logging
from retrieval import router as retrieval_router
from stats import router as stats_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    configure_logging()
    # Seed the in-memory catalog once per process.
    comics_repository.init_store()
    try:
        yield
    finally:
        comics_repository.close_store()


app = FastAPI(title="comics-catalog-api", lifespan=lifespan)

# Allow local frontend dev server to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(comics_router.router, tags=["comics"])
app.include_router(retrieval_router.router, tags=["retrieval"])
app.include_router(stats_router.router, tags=["stats"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "comics catalog api"}


def run() -> None:
    configure_logging()
    logger.info("Server is running on port %s", settings.port())
    uvicorn.run(app, host=settings.host(), port=settings.port())


if __name__ == "__main__":
    run()

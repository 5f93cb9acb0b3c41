"""FastAPI application for the Contact Identity API."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from contact_identity.api.errors import register_exception_handlers
from contact_identity.api.routes.health import router as health_router
from contact_identity.api.routes.identify import router as identify_router
from contact_identity.config.settings import get_settings
from contact_identity.db.engine import dispose_engine
from contact_identity.db.session import reset_session_factory


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    await dispose_engine()
    reset_session_factory()


app = FastAPI(title="Contact Identity API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(health_router)
app.include_router(identify_router)

"""FastAPI application entry point."""
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from api.errors import unhandled_exception_handler, validation_exception_handler
from api.routers import auth, bookmarks, health, tags
from core.config import get_settings
from db.session import create_engine, create_session_factory


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - create and dispose the database engine."""
    engine = create_engine(get_settings())
    app.state.session_factory = create_session_factory(engine)

    yield

    await engine.dispose()


app_settings = get_settings()

app = FastAPI(
    title="Bookmarker API",
    description="Personal bookmarks organised by tags, authenticated with x-token.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(bookmarks.router)
app.include_router(tags.router)

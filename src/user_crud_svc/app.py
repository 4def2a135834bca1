import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from user_crud_svc.config import get_settings
from user_crud_svc.models.base import build_engine, build_sessionmaker, check_connection
from user_crud_svc.routers.users import router as users_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Build the connection pool once per process and share it through app.state.

    Missing configuration or an unreachable database raises here, before the
    server accepts any request.
    """
    settings = get_settings()
    engine = build_engine(settings)
    try:
        await check_connection(engine)
    except Exception:
        await engine.dispose()
        raise

    app.state.engine = engine
    app.state.sessionmaker = build_sessionmaker(engine)
    logging.info(f"The server is running on http://{settings.API_HOST}:{settings.API_PORT}")
    try:
        yield
    finally:
        await engine.dispose()


async def error_body_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as {"error": "<message>"}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None)
    )


app = FastAPI(lifespan=lifespan)
app.add_exception_handler(StarletteHTTPException, error_body_handler)

# Include users router
app.include_router(users_router)

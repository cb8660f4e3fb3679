import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import settings
from core.database import engine
from models.base import Base
# импорт моделей регистрирует таблицы в Base.metadata
from models import match, message, swipe, user  # noqa: F401

from routers.auth import router as auth_router
from routers.feed import router as feed_router
from routers.swipe import router as swipe_router
from routers.match import router as match_router
from routers.message import router as message_router
from routers.profile import router as profile_router
from routers.health import router as health_router

app = FastAPI(
    title="Forkeep API",
    version="0.1.0",
    description="Backend дейтинг-приложения Forkeep: лента, свайпы, матчи и чат",
)

logger = logging.getLogger("uvicorn.error")


# Самый внутренний middleware; CORS добавляется последним и оборачивает всё,
# включая ответы 500.
@app.middleware("http")
async def catch_unhandled_errors(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )


@app.middleware("http")
async def log_request_time(request: Request, call_next):
    start_time = time.perf_counter()
    response = await call_next(request)
    process_time = (time.perf_counter() - start_time) * 1000
    logger.info(
        f"{request.method} {request.url.path} completed in {process_time:.2f} ms"
    )
    return response


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Клиент ждёт 400 с читаемым текстом, а не 422 со списком ошибок pydantic
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(feed_router)
app.include_router(swipe_router)
app.include_router(match_router)
app.include_router(message_router)
app.include_router(profile_router)
app.include_router(health_router)


@app.on_event("startup")
async def on_startup():
    # Сначала создаём все таблицы
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@app.get("/")
async def root():
    return {"message": "Forkeep API"}


@app.on_event("shutdown")
async def shutdown():
    # Закрываем все соединения пула
    await engine.dispose()

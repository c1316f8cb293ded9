import os
import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager

# === Config ===
from app.core.config import API_PREFIX, CORS_ORIGINS, LOG_LEVEL
from app.core.db import init_db

# === Logging ===
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

# === Routers ===
from app.api.v1 import auth, bugs, feed, ideas, users
from app.middleware.api_logger import APILoggerMiddleware


# === App lifecycle ===
@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        init_db()
        logger.info("✅ Startup complete: database ready.")
        yield
    except Exception as e:
        logger.exception("❌ Startup failed.")
        raise e
    finally:
        logger.info("🛑 Shutdown complete.")


# === Initialize App ===
app = FastAPI(
    title="IdeaBoard API",
    version="1.0.0",
    lifespan=lifespan
)


# === Global Exception Handlers ===
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    logger.warning(f"⚠️ Validation Error: {errors}")
    first = errors[0] if errors else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"{field}: {first.get('msg')}" if field else first.get("msg", "Invalid request")
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"❌ Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": str(exc) or "Internal server error"})


# === Middleware ===
app.add_middleware(APILoggerMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials="*" not in CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    expose_headers=["Content-Length"],
    max_age=600,
)


# === Health Check ===
@app.get(f"{API_PREFIX}/health")
async def health():
    return {"status": "ok"}


# === Mount API Routes ===
app.include_router(auth.router, prefix=API_PREFIX)
app.include_router(ideas.router, prefix=API_PREFIX)
app.include_router(users.router, prefix=API_PREFIX)
app.include_router(feed.router, prefix=API_PREFIX)
app.include_router(bugs.router, prefix=API_PREFIX)

# === Dev Hot Reload ===
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=os.getenv("ENV") == "dev")

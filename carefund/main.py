# carefund/main.py
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from carefund.core.config import settings
from carefund.core.errors import CareFundError
from carefund.core.logging_config import configure_logging
from carefund.routers import admin, chat, donations, donators, public

logger = logging.getLogger(__name__)

PUBLIC_DIR = Path(settings.public_dir)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)

    if settings.use_mongo:
        from carefund.core.db import ensure_indexes, get_client, get_db
        await ensure_indexes(get_db())
        logger.info(f"MongoDB ready ({settings.mongo_db})")
        yield
        get_client().close()
    else:
        logger.info("Using in-memory store")
        yield


app = FastAPI(lifespan=lifespan, title="CareFund API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------- Errors ----------------
@app.exception_handler(CareFundError)
async def carefund_error_handler(request: Request, exc: CareFundError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
    else:
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse({"message": exc.message}, status_code=exc.status_code)


@app.exception_handler(StarletteHTTPException)
async def fallback_handler(request: Request, exc: StarletteHTTPException):
    # unmatched routes land on the dashboard page instead of a JSON 404
    if exc.status_code in (404, 405):
        page = PUBLIC_DIR / "dashboard.html"
        if page.is_file():
            return FileResponse(page, status_code=404, media_type="text/html")
        return HTMLResponse("<h1>CareFund</h1>", status_code=404)
    return JSONResponse({"message": exc.detail}, status_code=exc.status_code)

# ---------------- Routers ----------------
app.include_router(donations.router)      # /donate, /api/my-donations
app.include_router(donators.router)       # /api/donator
app.include_router(admin.router)          # /api/admin
app.include_router(public.router)         # /api/public
app.include_router(chat.router)           # /api/chat


@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse("/dashboard")


@app.get("/health")
def health():
    return {"ok": True}


# static pages last so API routes win
if PUBLIC_DIR.is_dir():
    app.mount("/", StaticFiles(directory=PUBLIC_DIR, html=True), name="public")

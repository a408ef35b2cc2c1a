import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tarot_weaver.ai import close_clients
from tarot_weaver.catalog import validate_catalogs
from tarot_weaver.config import Settings, configure_logging
from tarot_weaver.errors import ReadingError
from tarot_weaver.routes.catalog_routes import router as catalog_router
from tarot_weaver.routes.reading_routes import router as reading_router

configure_logging(Settings.from_env().log_level)
log = logging.getLogger("tarot_weaver.main")

# static catalogs must be consistent before serving
validate_catalogs()


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_clients()


app = FastAPI(title="KKRT Tarot Weaver", version="0.1.0", lifespan=lifespan)

app.include_router(catalog_router)
app.include_router(reading_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ReadingError)
async def reading_error_handler(request: Request, exc: ReadingError) -> JSONResponse:
    log.info("%s %s -> %d %s", request.method, request.url.path, exc.status_code, type(exc).__name__)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.get("/health")
def health():
    return {"ok": True, "openai_configured": Settings.from_env().openai_configured}

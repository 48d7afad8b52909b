# --- Auth via bearer token; Swagger gets an 'Authorize' flow ---
import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.openapi.utils import get_openapi

from papernotes.shared.config import settings
from papernotes.shared.db import Base, engine

# import models so they register with Base.metadata
from papernotes.auth import models as auth_models  # noqa: F401
from papernotes.notes import models as notes_models  # noqa: F401

# Routers Import
from papernotes.auth.api import router as auth_router
from papernotes.notes.api import router as notes_router
from papernotes.summarize.api import router as summarize_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("papernotes")

TAGS_METADATA = [
    {"name": "Auth", "description": "Register, sign in, and manage the current account"},
    {"name": "Notes", "description": "Create, search, tag, style and summarize notes"},
    {"name": "Summarize", "description": "Summarize free text, optionally storing it on a note"},
    {"name": "Health", "description": "Service health"},
]

app = FastAPI(
    title="papernotes",
    version="0.1.0",
    description="Notes with tags, paper styles and AI summaries.",
    openapi_tags=TAGS_METADATA,
)

# ---- DEV-ONLY error handler (shows real errors in Swagger) ----
if settings.ENV == "dev":
    @app.exception_handler(Exception)
    async def _dev_ex_handler(request: Request, exc: Exception):
        logger.exception("unhandled error on %s", request.url.path)
        return JSONResponse(status_code=500, content={"detail": str(exc)})

# ----------------------------------------------------------------------


@app.on_event("startup")
def _init_db():
    Base.metadata.create_all(bind=engine)
    logger.info("database ready at %s", engine.url.render_as_string(hide_password=True))

@app.get("/healthz", tags=["Health"])
def healthz():
    return {"ok": True}

# --- Custom OpenAPI: bearerAuth as the default for everything but the public routes ---
def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )
    schema.setdefault("components", {}).setdefault("securitySchemes", {})
    schema["components"]["securitySchemes"]["bearerAuth"] = {
        "type": "http",
        "scheme": "bearer",
        "bearerFormat": "JWT",
    }
    for path, ops in schema.get("paths", {}).items():
        if path in ["/auth/token", "/auth/register", "/healthz"]:
            continue
        for op in ops.values():
            op.setdefault("security", [{"bearerAuth": []}])
    app.openapi_schema = schema
    return app.openapi_schema

# Routers
app.include_router(auth_router)
app.include_router(notes_router)
app.include_router(summarize_router)

app.openapi = custom_openapi

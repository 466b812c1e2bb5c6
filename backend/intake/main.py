import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from . import database
from .api import apply as apply_api
from .api import form as form_api
from .config import FRONTEND_ORIGINS, LOG_LEVEL, UPLOAD_DIR
from .services.resume_storage import ResumeStore
from .utils.error_handlers import get_error_message, register_exception_handlers

app = FastAPI(title="Job Application Intake")

app.include_router(apply_api.router)
app.include_router(form_api.router)

register_exception_handlers(app)

logger = logging.getLogger(__name__)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {
        "status": "Backend running",
        "service": "Job Application Intake"
    }


_default_origins = ["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:5173"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=[*_default_origins, *FRONTEND_ORIGINS],
    allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=True,
    allow_methods=["POST"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup() -> None:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Upload directory is created here, once, before the first request.
    app.state.resume_store = ResumeStore(UPLOAD_DIR)
    logger.info("Resumes stored under %s", app.state.resume_store.directory)

    try:
        database.init_db()
        app.state.db_init_error = None
    except Exception as e:
        logger.exception("Database init failed")
        app.state.db_init_error = str(e)


@app.get("/db/health")
def db_health():
    if getattr(app.state, "db_init_error", None):
        logger.error("DB init failed: %s", app.state.db_init_error)
        raise HTTPException(status_code=503, detail=get_error_message("database_error"))

    try:
        with database.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("DB connection failed: %s", e)
        raise HTTPException(status_code=503, detail=get_error_message("database_error"))

    return {"status": "ok"}

import os
import sys
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker


# Ensure `import backend.intake...` works regardless of where pytest is run from.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Test modules import backend.intake at collection time; keep a developer .env out of it.
os.environ.setdefault("DISABLE_DOTENV", "1")


@pytest.fixture(scope="session")
def test_db_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    return tmp_path_factory.mktemp("db") / "test.sqlite3"


@pytest.fixture()
def upload_root(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture()
def app(test_db_path: Path, upload_root: Path) -> FastAPI:
    """
    Create a FastAPI app wired to a temporary SQLite DB and upload directory.
    """
    # Must be set before importing backend.intake.database so engine init uses the test DB.
    os.environ["DISABLE_DOTENV"] = "1"
    os.environ["DATABASE_URL"] = f"sqlite+pysqlite:///{test_db_path}"
    os.environ["UPLOAD_DIR"] = str(test_db_path.parent / "uploads")

    from backend.intake import database as db

    engine = create_engine(
        os.environ["DATABASE_URL"],
        # timeout: concurrent-submission tests queue on SQLite's write lock
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    # Patch the shared database module so router dependencies use the test DB.
    db.engine = engine
    db.SessionLocal = TestingSessionLocal

    from backend.intake import models  # noqa: F401

    db.Base.metadata.drop_all(bind=engine)
    db.Base.metadata.create_all(bind=engine)

    from backend.intake.api import apply as apply_api
    from backend.intake.api import form as form_api
    from backend.intake.services.resume_storage import ResumeStore
    from backend.intake.utils.error_handlers import register_exception_handlers

    fastapi_app = FastAPI()
    fastapi_app.include_router(apply_api.router)
    fastapi_app.include_router(form_api.router)
    register_exception_handlers(fastapi_app)
    fastapi_app.state.resume_store = ResumeStore(upload_root)

    return fastapi_app


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def db_session(app: FastAPI):
    """
    Direct SQLAlchemy session bound to the same temporary SQLite DB used by the test app.
    """
    from backend.intake.database import SessionLocal

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def stored_files(upload_root: Path):
    """Callable listing the files currently in the resume directory."""
    def _list() -> list[str]:
        directory = upload_root / "resumes"
        return sorted(p.name for p in directory.iterdir()) if directory.exists() else []

    return _list

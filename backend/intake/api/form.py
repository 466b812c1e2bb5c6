from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

router = APIRouter(tags=["Form"])

FORM_PAGE = Path(__file__).resolve().parent.parent / "static" / "apply.html"


@router.get("/", include_in_schema=False)
def application_form():
    """Serve the applicant-facing form; it posts to /api/apply."""
    return FileResponse(FORM_PAGE, media_type="text/html")

from fastapi import APIRouter, Depends, Form, Request
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile as StarletteUploadFile

from ..database import get_db
from ..schemas.application import ApplicationCreated, ErrorResponse
from ..services.application_intake import ApplicationSubmission, submit_application
from ..services.resume_storage import ResumeStore

router = APIRouter(prefix="/api", tags=["Applications"])

SUCCESS_MESSAGE = "Application submitted successfully!"


def get_resume_store(request: Request) -> ResumeStore:
    # Built once at startup (see main.on_startup).
    return request.app.state.resume_store


@router.post(
    "/apply",
    response_model=ApplicationCreated,
    responses={400: {"model": ErrorResponse}, 405: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def apply(
    request: Request,
    fullName: str | None = Form(None),  # noqa: N803 - multipart field names are camelCase
    email: str | None = Form(None),
    phone: str | None = Form(None),
    linkedin: str | None = Form(None),
    db: Session = Depends(get_db),
    store: ResumeStore = Depends(get_resume_store),
):
    """
    Accept one job application as multipart form data.

    The resume may be sent under any field name (the form uses `resume`), but only one
    file part is allowed.
    """
    form = await request.form()
    files = [value for _, value in form.multi_items() if isinstance(value, StarletteUploadFile)]

    applicant = await submit_application(
        db,
        store,
        ApplicationSubmission(
            full_name=fullName,
            email=email,
            phone=phone,
            linkedin=linkedin,
            files=files,
        ),
    )
    return {"message": SUCCESS_MESSAGE, "id": applicant.id}

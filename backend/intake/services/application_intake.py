"""
Job application intake: validate a submission, store its resume, create the applicant.

Order of checks (first failure wins):
  1. at most one file part
  2. resume stored (declared type and size checked before writing)
  3. fullName, 4. email, 5. phone, 6. linkedin
  7. a resume was actually uploaded
  8/9. email, then phone, not already taken
  10. applicant row created

Duplicates are detected by the database's unique constraints at insert time, not by a
read-before-write, so two concurrent submissions cannot both get through. Once the
resume is on disk it is held through ResumeStore.claim(), so any failure after that
point removes it again.
"""
import logging
from dataclasses import dataclass

from fastapi import UploadFile
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.applicant import Applicant
from ..utils.error_handlers import (
    DuplicateApplicantError,
    FileUploadError,
    ValidationError,
    get_error_message,
)
from ..utils.validation import clean_email, clean_full_name, clean_linkedin, clean_phone
from .resume_storage import ResumeStore

logger = logging.getLogger(__name__)


@dataclass
class ApplicationSubmission:
    full_name: str | None = None
    email: str | None = None
    phone: str | None = None
    linkedin: str | None = None
    files: list[UploadFile] | None = None


def _present_files(files: list[UploadFile] | None) -> list[UploadFile]:
    # Browsers send an empty, unnamed part when no file was chosen.
    return [f for f in (files or []) if f is not None and f.filename]


def _conflicting_field(db: Session, *, email: str, phone: str, error: IntegrityError) -> str | None:
    """Work out which unique field an IntegrityError was about; email is reported first."""
    if db.query(Applicant.id).filter(Applicant.email == email).first():
        return "email"
    if db.query(Applicant.id).filter(Applicant.phone == phone).first():
        return "phone"

    # Row may be gone again by now; fall back to the driver's message.
    message = str(getattr(error, "orig", error)).lower()
    if "uq_applicants_email" in message or "applicants.email" in message:
        return "email"
    if "uq_applicants_phone" in message or "applicants.phone" in message:
        return "phone"
    return None


def _insert_applicant(db: Session, applicant: Applicant) -> None:
    email, phone = applicant.email, applicant.phone
    try:
        db.add(applicant)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        field = _conflicting_field(db, email=email, phone=phone, error=e)
        if field is None:
            logger.exception("Unclassified integrity error creating applicant")
            raise
        logger.info("Duplicate %s rejected: %s", field, email if field == "email" else phone)
        raise DuplicateApplicantError(field) from e
    except SQLAlchemyError:
        db.rollback()
        raise


async def submit_application(db: Session, store: ResumeStore, submission: ApplicationSubmission) -> Applicant:
    files = _present_files(submission.files)
    if len(files) > 1:
        raise FileUploadError(get_error_message("too_many_files"))

    stored = await store.save(files[0]) if files else None

    with store.claim(stored):
        full_name = clean_full_name(submission.full_name)
        email = clean_email(submission.email)
        phone = clean_phone(submission.phone)
        linkedin = clean_linkedin(submission.linkedin)

        if stored is None:
            raise ValidationError(get_error_message("resume_required"), field="resume")

        applicant = Applicant(
            full_name=full_name,
            email=email,
            phone=phone,
            linkedin=linkedin,
            resume_path=stored.relative_path,
        )
        _insert_applicant(db, applicant)
        stored.keep()

    db.refresh(applicant)

    logger.info("New application created: id=%s email=%s", applicant.id, applicant.email)
    return applicant

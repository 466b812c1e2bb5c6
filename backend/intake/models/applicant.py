from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.sql import func

from ..database import Base


class Applicant(Base):
    __tablename__ = "applicants"
    __table_args__ = (
        # Authoritative duplicate detection; email is stored lower-cased so this
        # is case-insensitive.
        UniqueConstraint("email", name="uq_applicants_email"),
        UniqueConstraint("phone", name="uq_applicants_phone"),
    )

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(20), nullable=False, index=True)
    linkedin = Column(String(500), nullable=True)
    # Relative path under UPLOAD_DIR (portable across machines)
    resume_path = Column(String(500), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<Applicant(id={self.id}, email={self.email})>"

from .applicant import Applicant

__all__ = ["Applicant"]

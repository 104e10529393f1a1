# app/errors.py
from typing import Optional


class SEOServiceError(Exception):
    """Base error for the service layer. Carries the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} ({self.detail})"
        return self.message

    def to_dict(self) -> dict:
        return {"error": self.message, "detail": self.detail}


class InvalidURLError(SEOServiceError):
    status_code = 400


class PageFetchError(SEOServiceError):
    status_code = 502


class ReportGenerationError(SEOServiceError):
    status_code = 502


class MalformedReportError(SEOServiceError):
    """The external report generator answered, but not with a valid report."""

    status_code = 502


class LeadStorageError(SEOServiceError):
    status_code = 500

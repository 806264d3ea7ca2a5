"""Application services."""

from .submission import SubmissionService

__all__ = ["SubmissionService"]

"""HTTP access to the judge API."""

from .judge_client import JudgeClient

__all__ = ["JudgeClient"]

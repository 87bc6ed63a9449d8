"""Pydantic models for the application."""

from leitner.models.base import ErrorDetail, StrictRequest, StrictResponse
from leitner.models.cards import AnswerRequest, CardCreate, CardResponse

__all__ = [
    "StrictRequest",
    "StrictResponse",
    "ErrorDetail",
    "CardCreate",
    "CardResponse",
    "AnswerRequest",
]

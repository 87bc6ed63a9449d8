"""
Card API Models (Pydantic)

Request/response schemas for the card endpoints. Field names follow the
JSON contract consumed by the web client (`isValid` is camelCase on the wire).

ARCHITECTURE NOTE:
    The domain object is the `Card` dataclass in
    leitner/services/learning/card_store.py. `CardResponse` is built from it
    with `CardResponse.model_validate(card)`.
"""

from typing import Optional

from pydantic import Field, StrictBool

from leitner.enums import Category
from leitner.models.base import StrictRequest, StrictResponse


class CardCreate(StrictRequest):
    """
    Request to create a new card.

    Blank question or answer is rejected by the card store with a
    validation error.
    """

    question: str = Field(..., description="Front side (question)")
    answer: str = Field(..., description="Back side (answer)")
    tag: Optional[str] = Field(None, description="Optional label used for filtering")


class CardResponse(StrictResponse):
    """
    Card as seen by the client.

    Scheduling dates stay server-side; the client only needs the category.
    """

    id: str
    question: str
    answer: str
    tag: Optional[str] = None
    category: Category


class AnswerRequest(StrictRequest):
    """Answer submitted for a card."""

    is_valid: StrictBool = Field(
        ..., alias="isValid", description="Whether the card was answered correctly"
    )

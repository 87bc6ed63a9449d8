"""
Strict Base Model for API Request/Response Validation

This module provides base classes with strict validation settings to harden
the API contract between the backend and the web client.

MOTIVATION:
    Parameter mismatches between frontend and backend are a common source of bugs.
    By enforcing strict validation:
    - Unknown fields are rejected (extra="forbid")
    - Type mismatches fail fast with clear error messages

Usage:
    # For request bodies (strictest validation)
    class CardCreate(StrictRequest):
        question: str
        answer: str

    # For response bodies (built from domain objects)
    class CardResponse(StrictResponse):
        id: str
        question: str

Architecture:
    API Request → StrictRequest (extra="forbid") → Route Handler
    Domain Card → StrictResponse (from_attributes) → API Response
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class StrictRequest(BaseModel):
    """
    Base model for API request bodies with strict validation.

    Rejects any fields not explicitly declared in the model, catching
    client typos and mismatches at request time rather than runtime.

    Features:
        - extra="forbid": Unknown fields are rejected
        - validate_default=True: Validates default values
        - str_strip_whitespace=True: Trims whitespace from strings
        - populate_by_name=True: camelCase aliases and snake_case names both work

    Example:
        >>> class AnswerRequest(StrictRequest):
        ...     is_valid: bool = Field(alias="isValid")
        >>>
        >>> AnswerRequest(isValid=True)  # OK
        >>> AnswerRequest(valid=True)  # Raises ValidationError
    """

    model_config = ConfigDict(
        extra="forbid",  # Reject unknown fields
        validate_default=True,  # Validate defaults
        str_strip_whitespace=True,  # Clean string inputs
        populate_by_name=True,  # Accept field names as well as aliases
    )


class StrictResponse(BaseModel):
    """
    Base model for API response bodies.

    More lenient than StrictRequest to allow flexibility in response data.
    Still enforces type validation but allows extra fields.

    Features:
        - extra="ignore": Silently ignores extra fields
        - validate_default=True: Validates default values
        - from_attributes=True: Builds from dataclasses and ORM rows

    Example:
        >>> CardResponse.model_validate(card)
    """

    model_config = ConfigDict(
        extra="ignore",  # Allow extra fields in responses
        validate_default=True,  # Validate defaults
        from_attributes=True,  # Enable attribute-based conversion
    )


class ErrorDetail(StrictResponse):
    """
    Standardized error response detail.

    Matches the error format from the error_handling middleware.
    Clients can rely on this consistent structure.
    """

    error: str  # Error code (e.g., "validation_error")
    message: str  # Human-readable message
    error_id: str  # Correlation ID for log lookup
    details: Optional[dict] = None  # Additional context
    timestamp: datetime

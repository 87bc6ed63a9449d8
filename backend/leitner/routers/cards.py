"""
Cards API Router

Endpoints for card management, the daily quiz and answers.

Endpoints:
- GET /cards - List cards, optionally filtered by repeated `tags`
- POST /cards - Create a card
- GET /cards/quizz - Cards due on a date (defaults to today)
- GET /cards/{card_id} - Get a card by ID
- PATCH /cards/{card_id}/answer - Record a pass/fail answer
"""

import logging
from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status

from leitner.dependencies import get_leitner_service, get_today
from leitner.middleware.rate_limit import limit_answer, limit_default
from leitner.models.base import ErrorDetail
from leitner.models.cards import AnswerRequest, CardCreate, CardResponse
from leitner.services.learning import Card, LeitnerService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/cards", tags=["cards"])


def _to_response(cards: list[Card]) -> list[CardResponse]:
    return [CardResponse.model_validate(card) for card in cards]


def parse_quiz_date(value: Optional[str], today: date) -> date:
    """
    Parse the `date` query parameter (YYYY-MM-DD).

    Missing, blank or unparseable values fall back to `today`. Other ISO
    8601 spellings (20240317, 2024-W11-7, 2024-3-5) count as unparseable.
    """
    if value is None or not value.strip():
        return today

    text = value.strip()
    try:
        parsed = datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        parsed = None

    # strptime accepts unpadded fields
    if parsed is None or parsed.isoformat() != text:
        logger.warning(f"Ignoring invalid quiz date {value!r}, using {today}")
        return today
    return parsed


# ===========================================
# Card Management Endpoints
# ===========================================


@router.get("", response_model=list[CardResponse])
@limit_default
async def list_cards(
    request: Request,
    tags: Optional[list[str]] = Query(None, description="Keep cards with one of these tags"),
    service: LeitnerService = Depends(get_leitner_service),
) -> list[CardResponse]:
    """
    List all cards.

    Repeat `tags` to filter (`/cards?tags=math&tags=history`). Tags match
    exactly and case-sensitively.
    """
    return _to_response(await service.list_cards(tags))


@router.post(
    "",
    response_model=CardResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorDetail}},
)
@limit_default
async def create_card(
    request: Request,
    card_data: CardCreate,
    service: LeitnerService = Depends(get_leitner_service),
) -> CardResponse:
    """
    Create a new card.

    Card is created in category FIRST and shows up in today's quiz.
    """
    card = await service.create_card(card_data)
    return CardResponse.model_validate(card)


# ===========================================
# Quiz Endpoints
# ===========================================


@router.get("/quizz", response_model=list[CardResponse])
@limit_default
async def get_quiz_cards(
    request: Request,
    quiz_date: Optional[str] = Query(
        None, alias="date", description="Quiz date (YYYY-MM-DD), defaults to today"
    ),
    today: date = Depends(get_today),
    service: LeitnerService = Depends(get_leitner_service),
) -> list[CardResponse]:
    """
    Get the cards to review on a date.

    Cards are ordered by category (lowest first), then never-reviewed cards,
    then oldest review, then id.
    """
    as_of = parse_quiz_date(quiz_date, today)
    return _to_response(await service.due_cards(as_of))


@router.get(
    "/{card_id}",
    response_model=CardResponse,
    responses={404: {"model": ErrorDetail}},
)
@limit_default
async def get_card(
    request: Request,
    card_id: str,
    service: LeitnerService = Depends(get_leitner_service),
) -> CardResponse:
    """Get a card by ID."""
    return CardResponse.model_validate(await service.get_card(card_id))


@router.patch(
    "/{card_id}/answer",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorDetail}},
)
@limit_answer
async def answer_card(
    request: Request,
    card_id: str,
    answer: AnswerRequest,
    today: date = Depends(get_today),
    service: LeitnerService = Depends(get_leitner_service),
) -> Response:
    """
    Record an answer for a card.

    - isValid=true: the card moves to the next category
    - isValid=false: the card goes back to FIRST
    """
    await service.record_answer(card_id, answer.is_valid, today)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""
Leitner Trainer Test Suite

Test Structure:
    tests/
    ├── conftest.py          # Shared fixtures and test environment
    ├── unit/                # Unit tests (isolated, in-memory store)
    │   ├── test_category.py         # Category intervals and transitions
    │   ├── test_leitner_scheduler.py  # Due predicate, quiz order, answers
    │   ├── test_card_store.py       # In-memory store and per-card locking
    │   └── test_leitner_service.py  # Quiz and answer use cases
    └── integration/         # Full app over HTTP and real SQLite databases
        ├── test_cards_api.py        # /cards endpoints
        ├── test_health.py           # Health endpoints and lifespan
        └── test_sql_card_store.py   # SQL card store

Running Tests:
    # Run all tests
    pytest backend/tests -v

    # Run only unit tests
    pytest backend/tests/unit -v

    # Run only integration tests
    pytest -m integration -v
"""

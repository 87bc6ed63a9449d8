"""
Integration Tests

Integration tests run the FastAPI app over HTTP and the SQL card store
against SQLite databases created under pytest's tmp_path.

These tests verify that all components work together correctly.
"""

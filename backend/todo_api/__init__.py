"""Application package for the Todo CRUD backend.

This package exposes the service, repository and model modules used by
the FastAPI application in `todo_api.main`. Individual modules contain
the concrete implementations and documentation.
"""

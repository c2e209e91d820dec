# app/notes_core/__init__.py
"""Shared code for the notes Lambdas: request adapter, operations, storage."""

# app/notes_core/errors.py
"""Failures raised by the notes operations and mapped to HTTP by the adapter."""


class NotesError(Exception):
    """Base class. ``status_code`` is used only when typed error mapping is on."""

    status_code = 500

    def __init__(self, message="Unknown error occurred"):
        self.message = message
        super().__init__(message)

    def details(self):
        """Extra body fields sent with typed error statuses."""
        return {}


class AuthenticationError(NotesError):
    status_code = 401

    def __init__(self, message="User not authenticated"):
        super().__init__(message)


class ValidationError(NotesError):
    status_code = 400

    def __init__(self, message="Validation failed", field=None):
        super().__init__(message)
        self.field = field

    def details(self):
        return {"field": self.field} if self.field else {}


class NotFoundError(NotesError):
    status_code = 404

    def __init__(self, message="Note not found"):
        super().__init__(message)


class StorageError(NotesError):
    status_code = 500

    def __init__(self, message="Storage request failed", code=None):
        super().__init__(message)
        self.code = code

    def details(self):
        return {"code": self.code} if self.code else {}

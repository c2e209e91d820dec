# app/notes_core/notes.py
"""
Note operations. Each takes the storage client first and an
AuthenticatedRequest second, and issues a single storage call.
Failures propagate to the adapter.
"""
import time
import uuid

from .errors import NotFoundError
from .types import AuthenticatedRequest, CreateNoteRequest, Note, UpdateNoteRequest

ID_REQUIRED = "Note ID is required"


def _now_ms():
    return int(time.time() * 1000)


def create_note(table, request: AuthenticatedRequest):
    data = CreateNoteRequest.from_body(request.body)
    note = Note(
        ownerId=request.owner_id,
        itemId=str(uuid.uuid1()),
        content=data.content,
        attachment=data.attachment,
        createdAt=_now_ms(),
    )
    table.put(note.to_item())
    return note.to_item()


def get_note(table, request: AuthenticatedRequest):
    note_id = request.require_path_parameter("id", ID_REQUIRED)
    item = table.get(request.owner_id, note_id)
    if not item:
        raise NotFoundError("Note not found")
    return Note.from_item(item).to_item()


def list_notes(table, request: AuthenticatedRequest):
    return [Note.from_item(item).to_item() for item in table.query_owner(request.owner_id)]


def update_note(table, request: AuthenticatedRequest):
    note_id = request.require_path_parameter("id", ID_REQUIRED)
    data = UpdateNoteRequest.from_body(request.body)
    # Fields missing from the body are cleared, not preserved.
    table.update_fields(
        request.owner_id,
        note_id,
        {"content": data.content, "attachment": data.attachment},
    )
    return {"status": True}


def delete_note(table, request: AuthenticatedRequest):
    note_id = request.require_path_parameter("id", ID_REQUIRED)
    table.delete(request.owner_id, note_id)
    return {"status": True}

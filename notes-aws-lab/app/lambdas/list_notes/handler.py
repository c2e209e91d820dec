# app/lambdas/list_notes/handler.py
from notes_core import notes
from notes_core.handler import handler
from notes_core.storage import NotesTable

# One client per container, reused across invocations.
table = NotesTable.from_env()


@handler
def lambda_handler(request):
    """GET /notes"""
    return notes.list_notes(table, request)

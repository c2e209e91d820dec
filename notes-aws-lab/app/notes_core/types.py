# app/notes_core/types.py
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

from .errors import ValidationError


def _optional_str(data: Dict[str, Any], name: str) -> Optional[str]:
    value = data.get(name)
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"'{name}' must be a string", field=name)
    return value


@dataclass
class Note:
    ownerId: str
    itemId: str
    content: Optional[str]
    createdAt: Optional[int]
    attachment: Optional[str] = ""

    def to_item(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "Note":
        # an update against a missing id leaves an item with no createdAt
        created_at = item.get("createdAt")
        return cls(
            ownerId=item["ownerId"],
            itemId=item["itemId"],
            content=item.get("content"),
            attachment=item.get("attachment"),
            createdAt=int(created_at) if created_at is not None else None,
        )


@dataclass
class CreateNoteRequest:
    content: str = ""
    attachment: str = ""

    @classmethod
    def from_body(cls, body: Optional[Dict[str, Any]]) -> "CreateNoteRequest":
        if body is None:
            return cls()
        return cls(
            content=_optional_str(body, "content") or "",
            attachment=_optional_str(body, "attachment") or "",
        )


@dataclass
class UpdateNoteRequest:
    """Absent or empty fields come through as None and are written as null."""

    content: Optional[str] = None
    attachment: Optional[str] = None

    @classmethod
    def from_body(cls, body: Optional[Dict[str, Any]]) -> "UpdateNoteRequest":
        if body is None:
            return cls()
        return cls(
            content=_optional_str(body, "content") or None,
            attachment=_optional_str(body, "attachment") or None,
        )


@dataclass
class AuthenticatedRequest:
    owner_id: str
    method: str = "GET"
    path_parameters: Dict[str, str] = field(default_factory=dict)
    body: Optional[Dict[str, Any]] = None

    def require_path_parameter(self, name: str, message: str) -> str:
        value = self.path_parameters.get(name)
        if not value:
            raise ValidationError(message, field=name)
        return value

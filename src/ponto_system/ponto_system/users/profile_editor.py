from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from ..core.enums import FieldState
from ..core.exceptions import ValidationError
from .model import User
from .service import PROFILE_FIELDS


@dataclass
class EditableField:
    """One profile field: VIEWING <-> EDITING.

    start_edit: VIEWING -> EDITING (draft = current value)
    save:       EDITING -> VIEWING (value = persisted draft)
    cancel:     EDITING -> VIEWING (draft discarded)
    """

    name: str
    value: str
    state: FieldState = FieldState.VIEWING
    draft: Optional[str] = None

    def start_edit(self) -> None:
        if self.state is not FieldState.VIEWING:
            raise ValidationError("Campo já está em edição")
        self.state = FieldState.EDITING
        self.draft = self.value

    def save(self, new_value: str, persist: Callable[[str], str]) -> None:
        if self.state is not FieldState.EDITING:
            raise ValidationError("Campo não está em edição")
        self.draft = new_value
        # persist may raise; the field then stays in EDITING with the draft kept
        self.value = persist(new_value)
        self.state = FieldState.VIEWING
        self.draft = None

    def cancel(self) -> None:
        if self.state is not FieldState.EDITING:
            raise ValidationError("Campo não está em edição")
        self.state = FieldState.VIEWING
        self.draft = None

    def to_dict(self) -> dict:
        return {"campo": self.name, "valor": self.value, "estado": self.state.value, "rascunho": self.draft}


class ProfileEditor:
    """Edit state of every editable profile field for one user.

    Only fields in EDITING are kept in the serialized state (the Flask session).
    """

    def __init__(self, fields: dict[str, EditableField]):
        self._fields = fields

    @classmethod
    def for_user(cls, user: User, state: Optional[dict] = None) -> "ProfileEditor":
        state = state or {}
        fields: dict[str, EditableField] = {}
        for name in PROFILE_FIELDS:
            field = EditableField(name=name, value=getattr(user, name))
            draft = state.get(name)
            if draft is not None:
                field.state = FieldState.EDITING
                field.draft = draft
            fields[name] = field
        return cls(fields)

    def field(self, name: str) -> EditableField:
        try:
            return self._fields[name]
        except KeyError:
            raise ValidationError("Campo não editável")

    def to_state(self) -> dict:
        return {name: f.draft for name, f in self._fields.items() if f.state is FieldState.EDITING}

    def to_dict(self) -> dict:
        return {name: f.to_dict() for name, f in self._fields.items()}

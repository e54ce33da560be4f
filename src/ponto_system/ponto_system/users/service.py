from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_matching, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "E-mail ou senha incorretos"

# editable attribute -> label shown in messages
PROFILE_FIELDS = {
    "full_name": "Nome completo",
    "company": "Empresa",
    "role": "Cargo",
}


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login.

    Passed explicitly to services so nothing depends on an ambient user.
    """

    user_id: int
    full_name: str
    email: str
    company: str


def require_active_user(users: UserRepository, actor: Optional[SessionUser]) -> User:
    """Resolve the acting user or raise AuthenticationError."""
    if actor is None:
        raise AuthenticationError("Usuário não autenticado")
    user = users.get_by_id(actor.user_id)
    if not user or not user.is_active:
        raise AuthenticationError("Usuário não autenticado")
    return user


def _password_matches(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password)
    except (TypeError, ValueError):
        # e.g. placeholder or corrupted hashes
        return False


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        if not isinstance(email, str) or not isinstance(password, str):
            raise AuthenticationError(LOGIN_FAILED_MESSAGE)
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or not user.is_active or not _password_matches(user.password_hash, password or ""):
            raise AuthenticationError(LOGIN_FAILED_MESSAGE)

        return SessionUser(
            user_id=user.user_id,
            full_name=user.full_name,
            email=user.email,
            company=user.company,
        )


class UserService:
    """Use cases: registration and self-service account management."""

    def __init__(self, users: UserRepository):
        self._users = users

    def register(
        self,
        *,
        full_name: str,
        email: str,
        company: str,
        role: str,
        password: str,
        confirm_password: str,
    ) -> User:
        full_name = require_non_empty(full_name, "Nome completo")
        email = require_email(email)
        company = require_non_empty(company, "Empresa")
        role = require_non_empty(role, "Cargo")
        require_matching(password, confirm_password, "As senhas não coincidem")
        require_min_length(password, "A senha", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ValidationError("E-mail já cadastrado")

        user_id = self._users.create_user(
            full_name=full_name,
            email=email,
            password_hash=generate_password_hash(password),
            company=company,
            role=role,
        )
        logger.info("user registered: id=%s email=%s", user_id, email)
        return self.get_profile(user_id)

    def get_profile(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user or not user.is_active:
            raise NotFoundError("Usuário não encontrado")
        return user

    def change_password(self, user_id: int, *, current_password: str, new_password: str, confirm_password: str) -> None:
        user = self.get_profile(user_id)
        if not _password_matches(user.password_hash, current_password or ""):
            raise ValidationError("Senha atual incorreta")
        require_matching(new_password, confirm_password, "As senhas não coincidem")
        require_min_length(new_password, "A nova senha", MIN_PASSWORD_LENGTH)

        self._users.update_password(user_id, password_hash=generate_password_hash(new_password))
        logger.info("password changed: id=%s", user_id)

    def update_profile_field(self, user_id: int, *, field: str, value: str) -> User:
        label = PROFILE_FIELDS.get(field)
        if not label:
            raise ValidationError("Campo não editável")
        value = require_non_empty(value, label)
        self.get_profile(user_id)

        self._users.update_profile_field(user_id, field=field, value=value)
        return self.get_profile(user_id)

    def deactivate_account(self, user_id: int, *, password: str) -> None:
        """Soft delete: the account stops authenticating, punches are kept."""
        user = self.get_profile(user_id)
        if not _password_matches(user.password_hash, password or ""):
            raise ValidationError("Senha incorreta")
        self._users.set_active(user_id, is_active=False)
        logger.info("account deactivated: id=%s", user_id)

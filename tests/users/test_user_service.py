from __future__ import annotations

import pytest
from werkzeug.security import check_password_hash

from src.ponto_system.ponto_system.core.exceptions import AuthenticationError, NotFoundError, ValidationError
from src.ponto_system.ponto_system.users.service import LOGIN_FAILED_MESSAGE, AuthService, UserService


def _register(svc: UserService, **overrides):
    data = dict(
        full_name="Bruno Lima",
        email="Bruno@Empresa.com ",
        company="Empresa Y",
        role="Dev",
        password="abc123",
        confirm_password="abc123",
    )
    data.update(overrides)
    return svc.register(**data)


def test_register_hashes_password_and_normalizes_email(users_repo):
    user = _register(UserService(users_repo))

    assert user.email == "bruno@empresa.com"
    assert user.password_hash != "abc123"
    assert check_password_hash(user.password_hash, "abc123")


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"full_name": "  "}, "Nome completo é obrigatório"),
        ({"email": "bruno@empresa"}, "E-mail inválido"),
        ({"confirm_password": "abc124"}, "As senhas não coincidem"),
        ({"password": "abc12", "confirm_password": "abc12"}, "A senha deve ter no mínimo 6 caracteres"),
        ({"email": "ana@empresa.com"}, "E-mail já cadastrado"),
    ],
)
def test_register_rejects(users_repo, overrides, message):
    before = dict(users_repo.users)

    with pytest.raises(ValidationError, match=message):
        _register(UserService(users_repo), **overrides)

    assert users_repo.users == before


def test_login_failure_message_is_generic(users_repo):
    auth = AuthService(users_repo)

    with pytest.raises(AuthenticationError) as wrong_pw:
        auth.authenticate("ana@empresa.com", "errada")
    with pytest.raises(AuthenticationError) as unknown:
        auth.authenticate("ninguem@empresa.com", "segredo1")

    assert str(wrong_pw.value) == str(unknown.value) == LOGIN_FAILED_MESSAGE


def test_login_ok_returns_session_user(users_repo):
    s_user = AuthService(users_repo).authenticate(" ANA@empresa.com", "segredo1")

    assert (s_user.user_id, s_user.full_name, s_user.company) == (1, "Ana Souza", "Empresa X")


def test_change_password(users_repo):
    svc = UserService(users_repo)

    with pytest.raises(ValidationError, match="Senha atual incorreta"):
        svc.change_password(1, current_password="x", new_password="novasenha", confirm_password="novasenha")
    with pytest.raises(ValidationError):
        svc.change_password(1, current_password="segredo1", new_password="nova", confirm_password="nova")

    svc.change_password(1, current_password="segredo1", new_password="novasenha", confirm_password="novasenha")
    assert AuthService(users_repo).authenticate("ana@empresa.com", "novasenha").user_id == 1


def test_update_profile_field(users_repo):
    svc = UserService(users_repo)

    assert svc.update_profile_field(1, field="company", value=" Empresa Z ").company == "Empresa Z"
    with pytest.raises(ValidationError):
        svc.update_profile_field(1, field="email", value="x@y.com")
    with pytest.raises(ValidationError):
        svc.update_profile_field(1, field="role", value="")


def test_deactivated_account_cannot_login(users_repo):
    svc = UserService(users_repo)

    with pytest.raises(ValidationError):
        svc.deactivate_account(1, password="errada")
    svc.deactivate_account(1, password="segredo1")

    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate("ana@empresa.com", "segredo1")
    with pytest.raises(NotFoundError):
        svc.get_profile(1)

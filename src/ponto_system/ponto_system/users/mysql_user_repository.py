from __future__ import annotations

from typing import Optional

import mysql.connector

from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import User
from .repository import UserRepository

_USER_COLUMNS = "id, nome_completo, email, senha_hash, empresa, cargo, data_cadastro, ativo"

# MySQL ER_DUP_ENTRY
_DUPLICATE_ENTRY = 1062

# domain attribute -> column
_EDITABLE_COLUMNS = {
    "full_name": "nome_completo",
    "company": "empresa",
    "role": "cargo",
}


def _row_to_user(row: dict) -> User:
    return User(
        user_id=int(row["id"]),
        full_name=row["nome_completo"],
        email=row["email"],
        password_hash=row["senha_hash"],
        company=row["empresa"],
        role=row["cargo"],
        created_at=row.get("data_cadastro"),
        is_active=bool(row.get("ativo", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM usuarios WHERE id=%s", (int(user_id),))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM usuarios WHERE email=%s", (email,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def create_user(
        self,
        *,
        full_name: str,
        email: str,
        password_hash: str,
        company: str,
        role: str,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO usuarios(nome_completo, email, empresa, cargo, senha_hash, ativo)
                    VALUES(%s,%s,%s,%s,%s,1)
                    """,
                    (full_name, email, company, role, password_hash),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            # uq_usuarios_email lost a race with a concurrent registration
            if e.errno == _DUPLICATE_ENTRY:
                raise ValidationError("E-mail já cadastrado") from e
            raise

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE usuarios SET senha_hash=%s WHERE id=%s", (password_hash, int(user_id)))
            return cur.rowcount > 0

    def update_profile_field(self, user_id: int, *, field: str, value: str) -> bool:
        column = _EDITABLE_COLUMNS.get(field)
        if not column:
            raise ValueError(f"Unsupported profile field: {field}")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE usuarios SET {column}=%s WHERE id=%s", (value, int(user_id)))
            return cur.rowcount > 0

    def set_active(self, user_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE usuarios SET ativo=%s WHERE id=%s", (1 if is_active else 0, int(user_id)))
            return cur.rowcount > 0

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class User:
    """Entidade de domínio: usuário (funcionário).

    Objeto de dados puro, sem acesso ao banco.
    `role` é o cargo informado no cadastro.
    """

    user_id: int
    full_name: str
    email: str
    password_hash: str
    company: str
    role: str
    created_at: Optional[datetime] = None
    is_active: bool = True

    def to_public_dict(self) -> dict:
        return {
            "id": self.user_id,
            "nomeCompleto": self.full_name,
            "email": self.email,
            "empresa": self.company,
            "cargo": self.role,
            "dataCadastro": self.created_at.strftime("%d/%m/%Y") if self.created_at else None,
        }

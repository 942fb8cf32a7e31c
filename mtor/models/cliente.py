"""Client (coaching subject) record."""
from datetime import date
from enum import Enum

from pydantic import field_validator

from .common import ClienteResumo, EntityBase, Genero


class StatusCliente(str, Enum):
    ATIVO = "ATIVO"
    INATIVO = "INATIVO"


class Cliente(EntityBase):
    nome: str
    email: str
    telefone: str = ""
    data_nascimento: date
    genero: Genero
    modalidade: str = ""
    objetivo: str = ""
    status: StatusCliente = StatusCliente.ATIVO

    @field_validator("email")
    @classmethod
    def _normalise_email(cls, value: str) -> str:
        value = value.strip().lower()
        if "@" not in value:
            raise ValueError("invalid e-mail address")
        return value

    def resumo(self) -> ClienteResumo:
        return ClienteResumo(
            id=self.id,
            nome=self.nome,
            email=self.email,
            telefone=self.telefone,
            data_nascimento=self.data_nascimento,
            genero=self.genero,
        )

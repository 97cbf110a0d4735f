"""
StockPro - Role Based Access Control
Papeis, contexto do chamador e tabela de permissoes por operacao
"""
import enum
from dataclasses import dataclass

from .errors import Forbidden, Unauthenticated


class Role(str, enum.Enum):
    """Papeis de usuario"""
    ADMIN = "ADMIN"
    GERENTE = "GERENTE"
    FUNCIONARIO = "FUNCIONARIO"


ALL_ROLES = frozenset(Role)
MANAGERS = frozenset({Role.ADMIN, Role.GERENTE})
ADMINS = frozenset({Role.ADMIN})

# Operacao -> papeis autorizados
PERMISSIONS = {
    "sale:create": ALL_ROLES,
    "sale:list": ALL_ROLES,
    "purchase:create": ALL_ROLES,
    "purchase:list": ALL_ROLES,
    "order:create": ALL_ROLES,
    "order:list": ALL_ROLES,
    "order:status": MANAGERS,
    "order:edit": ADMINS,
    "order:delete": ADMINS,
    "product:list": ALL_ROLES,
    "product:create": MANAGERS,
    "product:update": MANAGERS,
    "product:delete": MANAGERS,
    "debt:list": MANAGERS,
    "debt:create": MANAGERS,
    "payment:create": MANAGERS,
    "note:list": ALL_ROLES,
    "note:create": ALL_ROLES,
    "note:delete": ALL_ROLES,
    "report:view": MANAGERS,
    "user:list": ADMINS,
    "user:create": ADMINS,
    "user:update": ADMINS,
}


@dataclass(frozen=True)
class Caller:
    """Identidade de quem executa a operacao, passada explicitamente aos servicos"""
    user_id: str
    role: Role
    name: str = ""

    @property
    def is_funcionario(self) -> bool:
        return self.role == Role.FUNCIONARIO


def authorize(caller: Caller, operation: str) -> Caller:
    """
    Verifica se o chamador pode executar a operacao.
    Levanta Unauthenticated sem chamador e Forbidden sem papel suficiente.
    """
    if caller is None:
        raise Unauthenticated()

    allowed = PERMISSIONS.get(operation)
    if allowed is None:
        raise KeyError(f"Operacao desconhecida: {operation}")

    if Role(caller.role) not in allowed:
        raise Forbidden()

    return caller

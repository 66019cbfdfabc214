"""
===============================================================================
TARJETA CRC — domain/capabilities.py
===============================================================================

Módulo:
    Retículo de capacidades sobre documentos

Responsabilidades:
    - Definir el conjunto cerrado de capacidades (readable/editable/createUser).
    - Definir el orden total: createUser ⊇ editable ⊇ readable.
    - Resolver "¿la capacidad otorgada cubre la pedida?" como comparación entera.

Colaboradores:
    - domain.authority.AuthorityResolver: compara pedido vs otorgado.
    - application.guard: tabla estática operación -> capacidad requerida.
    - infra repos: persisten el valor string (wire format).

Notas:
    - Los valores string se mantienen iguales al wire format histórico
      ("readable", "editable", "createUser").
===============================================================================
"""

from __future__ import annotations

from enum import Enum


class Capability(str, Enum):
    """Capacidad sobre un documento (ordenada de menor a mayor)."""

    READABLE = "readable"
    EDITABLE = "editable"
    CREATE_USER = "createUser"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    def covers(self, requested: "Capability") -> bool:
        """True si esta capacidad implica la pedida (requested <= self)."""
        return requested.rank <= self.rank


_RANKS: dict[Capability, int] = {
    Capability.READABLE: 1,
    Capability.EDITABLE: 2,
    Capability.CREATE_USER: 3,
}


def parse_capability(raw: str | None) -> Capability | None:
    """Parseo tolerante del valor persistido; None si es desconocido."""
    if not raw:
        return None
    try:
        return Capability(raw.strip())
    except ValueError:
        return None

"""
===============================================================================
USE CASE: Get Effective Capability
===============================================================================

Devuelve la capacidad efectiva del actor sobre un documento para que la UI
decida qué controles mostrar. Delega en AuthorityResolver.effective_capability
(misma evaluación que resolve(); sin lógica duplicada en presentación).

Un actor sin ninguna capacidad recibe capability=None (no es un error).
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ...authority import AuthorityOutcome, AuthorityResolver
from .document_access import authority_error
from .document_results import CapabilityResult


class GetEffectiveCapabilityUseCase:
    def __init__(self, resolver: AuthorityResolver) -> None:
        self._resolver = resolver

    def execute(self, document_id: UUID, actor_id: UUID | None) -> CapabilityResult:
        decision = self._resolver.effective_capability(actor_id, document_id)
        if decision.outcome == AuthorityOutcome.FORBIDDEN:
            return CapabilityResult(capability=None, matched_rule=None)

        error = authority_error(decision)
        if error is not None:
            return CapabilityResult(error=error)

        return CapabilityResult(
            capability=decision.granted,
            matched_rule=decision.matched_rule.value,
        )

"""
===============================================================================
DOCUMENT ACCESS HELPERS (Guard / Authority -> DocumentError)
===============================================================================

Name:
    Document Access Helpers

Business Goal:
    Traducir decisiones del gate (GuardDecision) y del resolver
    (AuthorityDecision) a DocumentError consistentes, para que todos los
    casos de uso reporten los mismos códigos y mensajes.

Why (Context / Intención):
    - Duplicar el mapeo outcome -> error en cada use case genera
      inconsistencias (ej. un INTEGRITY_ERROR reportado como FORBIDDEN).
    - Centralizar reduce riesgo y facilita testeo.

-------------------------------------------------------------------------------
CRC CARD (Functions-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Responsibilities:
    - guard_error(decision) -> DocumentError | None
    - authority_error(decision, resource=...) -> DocumentError | None
    - helpers de construcción: not_found / validation / conflict / integrity

Collaborators:
    - application.guard: GuardDecision, GuardOutcome
    - application.authority: AuthorityDecision, AuthorityOutcome
    - document_results: DocumentError, DocumentErrorCode
===============================================================================
"""

from __future__ import annotations

from typing import Final, Mapping

from ...authority import AuthorityDecision, AuthorityOutcome
from ...guard import GuardDecision, GuardOutcome
from .document_results import DocumentError, DocumentErrorCode

RESOURCE_DOCUMENT: Final[str] = "Document"
RESOURCE_WIKI: Final[str] = "Wiki"
RESOURCE_GRANT: Final[str] = "Grant"

_GUARD_ERRORS: Final[Mapping[GuardOutcome, tuple[DocumentErrorCode, str]]] = {
    GuardOutcome.UNAUTHENTICATED: (
        DocumentErrorCode.UNAUTHENTICATED,
        "Authentication required.",
    ),
    GuardOutcome.FORBIDDEN: (DocumentErrorCode.FORBIDDEN, "Access denied."),
    GuardOutcome.NOT_FOUND: (DocumentErrorCode.NOT_FOUND, "Document not found."),
    GuardOutcome.EXPIRED: (DocumentErrorCode.EXPIRED, "Share link expired."),
    GuardOutcome.INTEGRITY_ERROR: (
        DocumentErrorCode.INTEGRITY_ERROR,
        "Document tree integrity error.",
    ),
}

_AUTHORITY_TO_GUARD: Final[Mapping[AuthorityOutcome, GuardOutcome]] = {
    AuthorityOutcome.ALLOW: GuardOutcome.ALLOW,
    AuthorityOutcome.UNAUTHENTICATED: GuardOutcome.UNAUTHENTICATED,
    AuthorityOutcome.FORBIDDEN: GuardOutcome.FORBIDDEN,
    AuthorityOutcome.NOT_FOUND: GuardOutcome.NOT_FOUND,
    AuthorityOutcome.INTEGRITY_ERROR: GuardOutcome.INTEGRITY_ERROR,
}


def _from_outcome(outcome: GuardOutcome, resource: str) -> DocumentError | None:
    if outcome == GuardOutcome.ALLOW:
        return None
    code, message = _GUARD_ERRORS[outcome]
    if code == DocumentErrorCode.NOT_FOUND:
        message = f"{resource} not found."
    return DocumentError(code=code, message=message, resource=resource)


def guard_error(decision: GuardDecision) -> DocumentError | None:
    """None si el gate dejó pasar; DocumentError estándar si no."""
    return _from_outcome(decision.outcome, RESOURCE_DOCUMENT)


def authority_error(
    decision: AuthorityDecision, *, resource: str = RESOURCE_DOCUMENT
) -> DocumentError | None:
    """Igual que guard_error para decisiones directas del resolver."""
    return _from_outcome(_AUTHORITY_TO_GUARD[decision.outcome], resource)


def not_found_error(resource: str = RESOURCE_DOCUMENT) -> DocumentError:
    return DocumentError(
        code=DocumentErrorCode.NOT_FOUND,
        message=f"{resource} not found.",
        resource=resource,
    )


def validation_error(message: str, resource: str = RESOURCE_DOCUMENT) -> DocumentError:
    return DocumentError(
        code=DocumentErrorCode.VALIDATION_ERROR, message=message, resource=resource
    )


def conflict_error(message: str, resource: str = RESOURCE_DOCUMENT) -> DocumentError:
    return DocumentError(
        code=DocumentErrorCode.CONFLICT, message=message, resource=resource
    )


def integrity_error(resource: str = RESOURCE_DOCUMENT) -> DocumentError:
    return DocumentError(
        code=DocumentErrorCode.INTEGRITY_ERROR,
        message="Document tree integrity error.",
        resource=resource,
    )


def unauthenticated_error(resource: str = RESOURCE_DOCUMENT) -> DocumentError:
    return DocumentError(
        code=DocumentErrorCode.UNAUTHENTICATED,
        message="Authentication required.",
        resource=resource,
    )

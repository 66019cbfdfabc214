"""
Application layer: authority engine, share state machine, request guard
pipeline and use cases.
"""

from .authority import AuthorityDecision, AuthorityOutcome, AuthorityResolver
from .guard import (
    OPERATION_RULES,
    GuardDecision,
    GuardMode,
    GuardOutcome,
    GuardRule,
    Operation,
    RequestGuardPipeline,
)
from .sharing import (
    PublicAccessDecision,
    PublicAccessOutcome,
    ShareRequest,
    ShareStateMachine,
    ShareTransition,
)

__all__ = [
    "AuthorityDecision",
    "AuthorityOutcome",
    "AuthorityResolver",
    "GuardDecision",
    "GuardMode",
    "GuardOutcome",
    "GuardRule",
    "OPERATION_RULES",
    "Operation",
    "PublicAccessDecision",
    "PublicAccessOutcome",
    "RequestGuardPipeline",
    "ShareRequest",
    "ShareStateMachine",
    "ShareTransition",
]

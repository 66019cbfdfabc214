"""Infrastructure services: store retry policy and share token generation."""

from .retry import create_retry_decorator, is_transient_error, with_retry
from .share_tokens import generate_share_token

__all__ = [
    "create_retry_decorator",
    "generate_share_token",
    "is_transient_error",
    "with_retry",
]

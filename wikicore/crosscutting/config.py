"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults for the authority engine (tree walk bound, share tokens)

Collaborators:
  - api/main.py: reads settings for CORS, pool and startup validation
  - container.py: picks in-memory vs PostgreSQL repositories, wires the resolver
  - identity/auth_users.py: JWT secret and cookie name

Constraints:
  - Lives in API/infrastructure layer, NOT in domain/application
  - No business logic, pure configuration

Notes:
  - Singleton via lru_cache
  - document_tree_max_depth bounds every ancestor/descendant walk
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        database_url: PostgreSQL connection string (unused with in-memory stores)
        app_env: Application environment (development/test/production)
        allowed_origins: Comma-separated CORS origins
        log_level: Root log level for the service logger
        log_json: Emit JSON logs (default: True)
        jwt_secret: Secret used to verify access tokens
        jwt_cookie_name: Cookie name carrying the access token
        jwt_access_ttl_minutes: Lifetime of tokens minted by create_access_token
        document_tree_max_depth: Max hops for ancestor/descendant walks (default: 64)
        document_subtree_max_nodes: Max documents collected by a cascade delete
        share_token_bytes: Entropy of public share tokens (default: 24)
        recent_documents_limit: Max entries in the recent documents list (default: 20)
        document_versions_limit: Max versions returned per history read (default: 50)
        db_pool_min_size / db_pool_max_size: Connection pool bounds
        db_statement_timeout_ms: Statement timeout for every pooled connection
        db_slow_query_seconds: Threshold for slow query warnings
        db_healthcheck_on_acquire: Run SELECT 1 when a connection is acquired
        retry_max_attempts: Store read retries on transient errors
        retry_base_delay_seconds / retry_max_delay_seconds: Backoff bounds
    """

    database_url: str = ""

    # Environment
    app_env: str = "development"

    # CORS configuration
    allowed_origins: str = "http://localhost:3000"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Security - JWT (solo verificación; la emisión vive fuera del servicio)
    jwt_secret: str = "dev-secret"
    jwt_cookie_name: str = "access_token"
    jwt_access_ttl_minutes: int = 30

    # Authority engine
    document_tree_max_depth: int = 64
    document_subtree_max_nodes: int = 10000
    share_token_bytes: int = 24

    # Document activity
    recent_documents_limit: int = 20
    document_versions_limit: int = 50

    # Database - Connection Pool
    db_pool_min_size: int = 2
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 30000
    db_slow_query_seconds: float = 0.25
    db_healthcheck_on_acquire: bool = True

    # Retry/Resilience
    retry_max_attempts: int = 3
    retry_base_delay_seconds: float = 0.2
    retry_max_delay_seconds: float = 5.0

    @field_validator(
        "document_tree_max_depth",
        "document_subtree_max_nodes",
        "recent_documents_limit",
        "document_versions_limit",
    )
    @classmethod
    def bounds_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("tree and listing bounds must be greater than 0")
        return v

    @field_validator("share_token_bytes")
    @classmethod
    def share_token_bytes_minimum(cls, v: int) -> int:
        if v < 16:
            raise ValueError("share_token_bytes must be >= 16")
        return v

    @field_validator("retry_max_attempts")
    @classmethod
    def retry_attempts_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("retry_max_attempts must be >= 1")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        level = (v or "").strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log_level: {v!r}")
        return level

    @model_validator(mode="after")
    def validate_bounds(self):
        if self.db_pool_min_size < 1 or self.db_pool_max_size < self.db_pool_min_size:
            raise ValueError("db pool sizes must satisfy 1 <= min <= max")
        if self.retry_base_delay_seconds > self.retry_max_delay_seconds:
            raise ValueError("retry_base_delay_seconds must be <= retry_max_delay_seconds")
        return self

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self

        insecure_secrets = {"dev-secret", "changeme", "change-me", "password"}
        jwt_secret = (self.jwt_secret or "").strip()
        if not jwt_secret or jwt_secret in insecure_secrets:
            raise ValueError(
                "JWT_SECRET must be set to a strong, non-default value in production"
            )
        if len(jwt_secret) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters in production")
        if not self.database_url.strip():
            raise ValueError("DATABASE_URL is required in production")
        return self

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def uses_in_memory_stores(self) -> bool:
        """True en test/CI: el container arma repositorios in-memory."""
        return self.app_env.strip().lower() in {"test", "testing", "ci"}

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()

"""
Application settings loaded from environment variables.
"""

from pydantic_settings import BaseSettings

DEFAULT_JWT_SECRET = "change-me-jwt-secret-key"


class Settings(BaseSettings):
    # ── Server ───────────────────────────────────────────────────────────
    port: int = 8080
    host: str = "0.0.0.0"
    environment: str = "development"   # "production" hardens startup checks
    debug: bool = False
    cors_origins: list = ["*"]

    # ── Database ─────────────────────────────────────────────────────────
    database_url: str = "sqlite+aiosqlite:///./erp.db"

    # ── Security Secrets ─────────────────────────────────────────────────
    jwt_secret: str = DEFAULT_JWT_SECRET   # HMAC secret for session tokens
    bcrypt_rounds: int = 12

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
    }

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def uses_default_secret(self) -> bool:
        """True when the token secret is empty or the shipped placeholder."""
        return not self.jwt_secret or self.jwt_secret == DEFAULT_JWT_SECRET

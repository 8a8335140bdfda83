"""Application configuration."""

from os import getenv

from pydantic import BaseModel

INSECURE_JWT_SECRET: str = "development-secret-change-in-production"


def _split_csv(value: str) -> list[str]:
    return [part.strip().lower() for part in value.split(",") if part.strip()]


class Settings(BaseModel):
    """Runtime settings for the application."""

    app_name: str = "Restaurant CMS"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    database_url: str = getenv("DATABASE_URL", "sqlite:///./restaurant_cms.db")
    restaurant_slug: str = getenv("RESTAURANT_SLUG", "hulihuli")
    site_name: str = getenv("SITE_NAME", "Huli Huli")
    auth_strategy: str = getenv("AUTH_STRATEGY", "session")
    jwt_secret_key: str = getenv("JWT_SECRET_KEY", INSECURE_JWT_SECRET)
    jwt_algorithm: str = getenv("JWT_ALGORITHM", "HS256")
    auth_token_max_age_hours: int = int(getenv("AUTH_TOKEN_MAX_AGE_HOURS", "24"))
    admin_allowed_emails: list[str] = _split_csv(getenv("ADMIN_ALLOWED_EMAILS", ""))
    admin_allowed_domains: list[str] = _split_csv(getenv("ADMIN_ALLOWED_DOMAINS", ""))
    admin_email: str = getenv("ADMIN_EMAIL", "admin@dev.local")
    admin_password: str = getenv("ADMIN_PASSWORD", "admin123")
    seed_demo_data: bool = getenv("SEED_DEMO_DATA", "1") == "1"

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() in {"prod", "production"}


settings: Settings = Settings()

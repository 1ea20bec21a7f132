from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "Garden Store API"
    version: str = "0.1.0"
    DEBUG: bool = False
    APP_DOMAIN: str = "example.com"
    APP_DATABASE_DSN: str = "sqlite:////tmp/database.db"
    REDIS_URL: str = "redis://localhost:6379"

    # Store
    STORE_CURRENCY: str = "BRL"
    SHIPPING_FEE: Decimal = Decimal("50.00")
    BUDGET_VALIDITY_DAYS: int = 15

    # Abandoned carts: carts idle between MIN and MAX hours are notified
    ABANDONED_CART_MIN_HOURS: int = 24
    ABANDONED_CART_MAX_HOURS: int = 48
    ABANDONED_CART_BATCH_LIMIT: int = 100

    # SMTP (empty host disables delivery)
    SMTP_HOST: str = ""
    SMTP_PORT: int = 587
    SMTP_USERNAME: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_USE_TLS: bool = True
    SMTP_FROM_EMAIL: str = "noreply@example.com"
    SMTP_FROM_NAME: str = "Eco Jardim"

    # Customer passwords and session tokens
    CUSTOMER_TOKEN_SECRET: str = "customer-token-dev-secret-change-me-in-production"
    CUSTOMER_TOKEN_TTL_HOURS: int = 24
    PASSWORD_HASH_ROUNDS: int = 12

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"


settings = Settings()

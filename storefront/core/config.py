"""Application configuration."""

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.

    Environment variables will be loaded and validated using Pydantic.
    """

    app_name: str = "Storefront"
    version: str = "0.1.0"
    api_prefix: str = "/api"

    # CORS Settings
    cors_origins: list[str] = ["*"]  # Default to allow all in development
    cors_allow_credentials: bool = False

    # Site Settings
    SITE_URL: str = "http://localhost:3000"

    # Locale Settings
    DEFAULT_LOCALE: str = "sv-se"
    SUPPORTED_LOCALES: list[str] = ["sv-se"]
    LANGUAGE_NAMES: dict[str, str] = {"sv-se": "Svenska"}
    LOCALIZED_UIDS: list[str] = Field(
        default=["om-kumpan-starter", "var-historia"],
        description="UIDs that must not be served under a non-default locale",
    )

    # CMS Settings
    CMS_REPOSITORY_NAME: str = "storefront"
    CMS_ACCESS_TOKEN: str | None = None
    CMS_API_URL: str | None = None  # Defaults to https://<repo>.cdn.prismic.io/api/v2
    CMS_TIMEOUT: float = 10.0
    CMS_MAX_RETRIES: int = Field(default=2, ge=0)

    # Payment Settings
    STRIPE_SECRET_KEY: str | None = None

    # Mail Settings
    RESEND_API_KEY: str | None = None
    FROM_EMAIL: str | None = None
    TO_EMAIL: str | None = None
    EMAIL_SUBJECT: str = "New Contact Form Submission"

    # Cache Settings
    HREFLANG_CACHE_TTL: int = Field(default=300, ge=0)  # 5 minutes
    HREFLANG_CACHE_SIZE: int = Field(default=1024, ge=1)
    PRODUCT_CACHE_TTL: int = Field(default=300, ge=0)
    PRODUCT_CACHE_SIZE: int = Field(default=512, ge=1)
    MAX_PARENT_DEPTH: int = Field(default=8, ge=1)

    # Redis Settings (cart persistence)
    REDIS_URL: str | None = None

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",  # Allow extra fields in environment
    )

    @field_validator("SITE_URL")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """Store the site URL without a trailing slash."""
        return value.rstrip("/")

    @model_validator(mode="after")
    def validate_origins(self) -> "Settings":
        """Validate CORS origins."""
        if self.cors_origins == ["*"]:
            self.cors_origins = [
                "http://localhost",
                "http://localhost:8000",
                "http://localhost:3000",
            ]
        return self

    @model_validator(mode="after")
    def validate_locales(self) -> "Settings":
        """Ensure the default locale belongs to the supported locale table."""
        self.DEFAULT_LOCALE = self.DEFAULT_LOCALE.lower()
        self.SUPPORTED_LOCALES = [locale.lower() for locale in self.SUPPORTED_LOCALES]
        if self.DEFAULT_LOCALE not in self.SUPPORTED_LOCALES:
            raise ValueError(
                f"DEFAULT_LOCALE {self.DEFAULT_LOCALE!r} is not in SUPPORTED_LOCALES"
            )
        return self

    @property
    def cms_api_url(self) -> str:
        """Base URL of the CMS document API."""
        if self.CMS_API_URL:
            return self.CMS_API_URL.rstrip("/")
        return f"https://{self.CMS_REPOSITORY_NAME}.cdn.prismic.io/api/v2"


# Create settings instance
settings = Settings()

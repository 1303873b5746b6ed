"""Application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict

R2_ENDPOINT_TEMPLATE = "https://{account_id}.r2.cloudflarestorage.com"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Object storage (Cloudflare R2 or any S3-compatible endpoint)
    R2_ACCOUNT_ID: str = ""
    R2_ACCESS_KEY_ID: str = ""
    R2_SECRET_ACCESS_KEY: str = ""
    R2_BUCKET_NAME: str = ""
    R2_ENDPOINT: str = ""
    R2_REGION: str = "auto"

    # Basic auth (disabled unless both are set)
    AUTH_USERNAME: str = ""
    AUTH_PASSWORD: str = ""

    # Application
    APP_NAME: str = "Image Storage API"
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["*"]

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    @property
    def storage_endpoint(self) -> str:
        """Explicit endpoint if given, otherwise the one derived from the account id."""
        if self.R2_ENDPOINT:
            return self.R2_ENDPOINT
        if self.R2_ACCOUNT_ID:
            return R2_ENDPOINT_TEMPLATE.format(account_id=self.R2_ACCOUNT_ID)
        return ""

    @property
    def storage_configured(self) -> bool:
        return all(
            (
                self.storage_endpoint,
                self.R2_ACCESS_KEY_ID,
                self.R2_SECRET_ACCESS_KEY,
                self.R2_BUCKET_NAME,
            )
        )

    @property
    def auth_enabled(self) -> bool:
        return bool(self.AUTH_USERNAME and self.AUTH_PASSWORD)


def get_settings() -> Settings:
    """Load settings from the current environment."""
    return Settings()

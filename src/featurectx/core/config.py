from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Naming conventions
    FEATURE_ENV_PREFIX: str = "X_FEATURE_"
    FEATURE_QUERY_PREFIX: str = "feature-"
    FEATURE_HEADER_PREFIX: str = "x-feature-"

    # Key under request.state holding the derived flag overlay
    FEATURE_STATE_KEY: str = "feature_ctx"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s features=%(features)s msg=%(message)s"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

settings = Settings()

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "ProTracker API"
    environment: str = "development"
    log_level: str = "INFO"
    cors_allow_origins: str = Field(default="http://localhost:3000,http://localhost:3001", validation_alias="CORS_ALLOW_ORIGINS")

    db_path: str = Field(default="data/db.json", validation_alias="DB_PATH")
    event_log_path: str = Field(default="logs/events.jsonl", validation_alias="EVENT_LOG_PATH")

    # Slate dates are resolved against this zone's calendar day.
    timezone: str = Field(default="America/New_York", validation_alias="TIMEZONE")

    # Projection / edge settings
    default_window: int = Field(default=10, validation_alias="DEFAULT_WINDOW")
    max_window: int = Field(default=30, validation_alias="MAX_WINDOW")
    default_projection_mode: str = Field(default="weighted", validation_alias="DEFAULT_PROJECTION_MODE")
    tier_a_min_edge: float = Field(default=3.0, validation_alias="TIER_A_MIN_EDGE")
    tier_b_min_edge: float = Field(default=1.5, validation_alias="TIER_B_MIN_EDGE")

    leaders_top_n: int = Field(default=25, validation_alias="LEADERS_TOP_N")
    props_max_limit: int = Field(default=500, validation_alias="PROPS_MAX_LIMIT")
    line_moves_default_limit: int = Field(default=50, validation_alias="LINE_MOVES_DEFAULT_LIMIT")

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_allow_origins.split(",") if origin.strip()]

    @property
    def dev_routes_enabled(self) -> bool:
        return self.environment.strip().lower() != "production"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        extra="ignore",
        case_sensitive=False,
    )


settings = Settings()

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    OPENAI_API_KEY: str | None = None

    OPENAI_MODEL_CHAT: str = "gpt-4o-mini"
    OPENAI_TEMPERATURE_CHAT: float = 0.4
    OPENAI_MAX_TOKENS: int = 800

    COMPLETION_TIMEOUT_SECONDS: float = 8.0
    CHAT_HISTORY_WINDOW: int = 10
    ORDER_PRICE_POLICY: str = "catalog"  # "catalog" | "strict" | "trust"

    CATALOG_PATH: str | None = None
    SESSION_DATA_DIR: str = "./data/sessions"

    VILLAGE_NAME: str = "Curug Badak"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"


settings = Settings()

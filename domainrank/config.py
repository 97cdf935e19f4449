from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- Runtime ---
    ENV: str = "dev"  # dev|prod
    LOG_LEVEL: str = "INFO"

    # --- Minimal B2B Auth (API key) ---
    # Send: X-API-Key: <key>
    API_KEY: str | None = None

    # --- Indexing subgraph (GraphQL) ---
    SUBGRAPH_URL: str = "https://api-testnet.doma.xyz/graphql"
    SUBGRAPH_API_KEY: str | None = None

    # --- Outbound HTTP resilience ---
    HTTP_TIMEOUT_S: float = 15.0
    HTTP_MAX_RETRIES: int = 2
    HTTP_BACKOFF_BASE_S: float = 0.5
    HTTP_RATE_LIMIT_RPS: float = 5.0  # 0 disables
    HTTP_CIRCUIT_FAIL_THRESHOLD: int = 5
    HTTP_CIRCUIT_RESET_S: float = 30.0

    # --- Trending ---
    TRENDING_DEFAULT_LIMIT: int = 8
    TRENDING_DEFAULT_STRATEGY: str = "characteristics-weighted"
    # fetch limit * multiplier candidates so the prefilter has room to choose
    TRENDING_CANDIDATE_MULTIPLIER: int = 2


settings = Settings()

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="ROYALEMETA_", extra="ignore")

    app_name: str = "Royale Meta Finder"
    debug: bool = False

    royale_api_url: str = "https://api.clashroyale.com/v1"
    royale_api_key: str = ""
    request_timeout: float = 30.0

    # Meta sampling
    sample_size: int = 200
    batch_size: int = 8

    # Presentation defaults
    recent_tags_limit: int = 5
    result_limit: int = 50

    # Affinity score weights (see analysis.affinity.ScoringWeights)
    elite_weight: float = 100.0
    missing_evolution_penalty: float = 10.0
    popularity_weight: float = 0.1


settings = Settings()


# =============================================================================
# SAMPLING SAFETY LIMITS
# =============================================================================

# Upper bound on players examined per analysis run
MAX_SAMPLE_SIZE = 1000

# Upper bound on concurrent outbound requests per batch
MAX_BATCH_SIZE = 32

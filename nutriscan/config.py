from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    anthropic_api_key: str = ""

    oracle_model: str = "claude-sonnet-4-5-20250929"

    # Anthropic API timeout settings (seconds)
    anthropic_timeout: int = 120  # month-long meal plans take a while
    anthropic_connect_timeout: int = 10  # Connection establishment

    # Sampling: analysis should be reproducible, plan generation may vary
    analysis_temperature: float = 0.2
    meal_plan_temperature: float = 0.5
    analysis_max_tokens: int = 4096
    meal_plan_max_tokens: int = 16000

    # Locale used until the user toggles it ("es" or "en")
    default_language: str = "es"

    # Health tips rotate every N seconds
    tip_rotation_seconds: float = 10.0

    # Uploaded images wider than this are downscaled before sending
    max_image_width: int = 1920

    class Config:
        env_file = ".env"


settings = Settings()

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # AGI browser-agent API
    agi_api_key: str = ""
    agi_base_url: str = "https://api.agi.tech/v1"
    agi_agent_name: str = "agi-0"
    agi_mock_data: bool = False  # serve synthetic results instead of calling the agent
    agi_force_remote: bool = False  # skip cache reads, always hit the agent

    # Session pool
    agi_pool_max_size: int = 3
    agi_pool_soft_size: int = 2
    agi_session_ttl_minutes: int = 25
    agi_pool_wait_timeout_seconds: float = 60.0
    agi_pool_wait_interval_seconds: float = 2.0

    # Task polling
    agi_poll_interval_seconds: float = 3.0
    agi_poll_max_attempts: int = 5

    # Result cache
    agi_cache_file: str = "agi-cache.json"
    agi_cache_ttl_hours: int = 24

    # OpenAI
    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"
    advisor_model: str = "gpt-4o-mini"
    analysis_model: str = "gpt-4"
    advisor_max_retries: int = 3
    advisor_timeout_seconds: float = 60.0

    # App
    cors_origins: str = "http://localhost:3000"
    app_log_level: str = "INFO"
    noisy_log_level: str = "WARNING"
    log_dir: str = "logs"
    log_to_file: bool = True

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",")]


settings = Settings()

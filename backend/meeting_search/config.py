from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    snapshot_path: str = "~/.local/share/meeting_search/snapshot.json"

    search_context_length: int = 50
    search_min_score_threshold: float = 0.0
    search_weight_title: float = 1.5
    search_weight_summary: float = 1.2
    search_weight_content: float = 1.0
    search_weight_speaker: float = 0.8

    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    model_config = {"env_file": ["../.env", ".env"], "extra": "ignore"}

    def search_options(self) -> dict:
        return {
            "context_length": self.search_context_length,
            "min_score_threshold": self.search_min_score_threshold,
            "field_weights": {
                "title": self.search_weight_title,
                "summary": self.search_weight_summary,
                "content": self.search_weight_content,
                "speaker": self.search_weight_speaker,
            },
        }


settings = Settings()

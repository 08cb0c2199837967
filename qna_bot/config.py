"""
Configuration management for the QnA bot.
"""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class _Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


class BotConfig(_Settings):
    """Bot Framework configuration settings."""

    app_id: str = Field("", validation_alias="MicrosoftAppId")
    app_password: str = Field("", validation_alias="MicrosoftAppPassword")
    port: int = Field(3978, validation_alias="PORT")


class QnAConfig(_Settings):
    """QnA Maker knowledge base settings."""

    service_name: str = Field("QnABot", validation_alias="QNA_SERVICE_NAME")
    knowledge_base_id: str = Field("", validation_alias="QNA_KNOWLEDGEBASE_ID")
    endpoint_key: str = Field("", validation_alias="QNA_ENDPOINT_KEY", repr=False)
    host: str = Field("", validation_alias="QNA_ENDPOINT_HOST")

    top: int = Field(1, validation_alias="QNA_TOP")
    score_threshold: float = Field(0.3, validation_alias="QNA_SCORE_THRESHOLD")
    timeout: float = Field(100.0, validation_alias="QNA_TIMEOUT")

    # A .bot file takes precedence over the individual settings above
    bot_file_path: Optional[str] = Field(None, validation_alias="BOT_FILE_PATH")

    @property
    def is_configured(self) -> bool:
        return bool(self.knowledge_base_id and self.endpoint_key and self.host)


class MonitoringConfig(_Settings):
    """Monitoring and logging configuration."""

    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")


class Config(_Settings):
    """Main configuration class that combines all settings."""

    bot: BotConfig = Field(default_factory=BotConfig)
    qna: QnAConfig = Field(default_factory=QnAConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)


# Global configuration instance
config = Config()

"""
Tests for environment-driven configuration.
"""

from qna_bot.config import BotConfig, Config, MonitoringConfig, QnAConfig


def test_qna_settings_from_environment(monkeypatch):
    monkeypatch.setenv("QNA_KNOWLEDGEBASE_ID", "kb-env")
    monkeypatch.setenv("QNA_ENDPOINT_KEY", "key-env")
    monkeypatch.setenv("QNA_ENDPOINT_HOST", "https://env.test/qnamaker")
    monkeypatch.setenv("QNA_SCORE_THRESHOLD", "0.5")

    qna = QnAConfig()

    assert qna.knowledge_base_id == "kb-env"
    assert qna.endpoint_key == "key-env"
    assert qna.host == "https://env.test/qnamaker"
    assert qna.score_threshold == 0.5
    assert qna.service_name == "QnABot"
    assert qna.is_configured


def test_endpoint_key_not_in_repr(monkeypatch):
    monkeypatch.setenv("QNA_ENDPOINT_KEY", "super-secret")

    assert "super-secret" not in repr(QnAConfig())


def test_bot_settings_from_environment(monkeypatch):
    monkeypatch.setenv("MicrosoftAppId", "app-id")
    monkeypatch.setenv("PORT", "8080")

    bot = BotConfig()

    assert bot.app_id == "app-id"
    assert bot.port == 8080


def test_defaults_do_not_require_environment(monkeypatch):
    for name in ("QNA_KNOWLEDGEBASE_ID", "QNA_ENDPOINT_KEY", "QNA_ENDPOINT_HOST", "BOT_FILE_PATH"):
        monkeypatch.delenv(name, raising=False)

    settings = Config()

    assert not settings.qna.is_configured
    assert settings.qna.bot_file_path is None
    assert MonitoringConfig().log_level

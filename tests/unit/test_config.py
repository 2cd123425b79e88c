"""
Unit tests for configuration loading and validation.
"""

import pytest

from ai_code_reviewer.config import (
    AppConfig,
    ConfigurationError,
    GitHubConfig,
    LLMConfig,
    ReviewConfig,
    DEFAULT_MODEL,
    DEFAULT_BASE_URL,
)


ENV_VARS = (
    "GITHUB_TOKEN", "GITHUB_API_URL", "GITHUB_TIMEOUT",
    "OPENROUTER_API_KEY", "OPENAI_API_KEY", "AI_MODEL", "AI_BASE_URL", "AI_MAX_TOKENS",
    "FALLBACK_BATCH_SIZE", "FALLBACK_BATCH_DELAY", "FILES_PAGE_SIZE", "MAX_CONCURRENCY",
    "LOG_LEVEL", "LOG_FORMAT", "LOG_FILE",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestAppConfig:
    """Unit tests for AppConfig."""

    def test_defaults(self, clean_env):
        config = AppConfig.from_env()

        assert config.github.token is None
        assert config.llm.model == DEFAULT_MODEL
        assert config.llm.base_url == DEFAULT_BASE_URL
        assert config.llm.max_tokens == 1000
        assert config.review.fallback_batch_size == 10
        assert config.review.fallback_batch_delay == 1.0
        assert config.review.files_page_size == 100
        assert config.review.max_concurrency == 1

    def test_from_env(self, clean_env):
        clean_env.setenv("GITHUB_TOKEN", "ghp_env")
        clean_env.setenv("OPENAI_API_KEY", "sk-openai")
        clean_env.setenv("AI_MODEL", "openai/gpt-4o-mini")
        clean_env.setenv("MAX_CONCURRENCY", "4")

        config = AppConfig.from_env()

        assert config.github.token == "ghp_env"
        assert config.llm.api_key == "sk-openai"
        assert config.llm.model == "openai/gpt-4o-mini"
        assert config.review.max_concurrency == 4

    def test_openrouter_key_preferred(self, clean_env):
        clean_env.setenv("OPENROUTER_API_KEY", "sk-or")
        clean_env.setenv("OPENAI_API_KEY", "sk-openai")

        assert AppConfig.from_env().llm.api_key == "sk-or"

    def test_from_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "github:\n"
            "  token: ghp_yaml\n"
            "llm:\n"
            "  api_key: sk-yaml\n"
            "  max_tokens: 500\n"
            "review:\n"
            "  fallback_batch_size: 5\n",
            encoding="utf-8",
        )

        config = AppConfig.from_yaml(str(config_file))

        assert config.github.token == "ghp_yaml"
        assert config.llm.max_tokens == 500
        assert config.review.fallback_batch_size == 5
        assert config.review.fallback_batch_delay == 1.0

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.from_yaml(str(tmp_path / "missing.yaml"))

    def test_non_numeric_env_value(self, clean_env):
        clean_env.setenv("GITHUB_TIMEOUT", "abc")

        with pytest.raises(ConfigurationError, match="GITHUB_TIMEOUT must be a number"):
            AppConfig.from_env()

    def test_from_yaml_unknown_key(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("review:\n  batch_size: 5\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="batch_size"):
            AppConfig.from_yaml(str(config_file))

    def test_from_yaml_invalid_document(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("github: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            AppConfig.from_yaml(str(config_file))

    def test_from_yaml_section_must_be_mapping(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("llm: deepseek\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="must be a mapping"):
            AppConfig.from_yaml(str(config_file))

    def test_validate_reports_missing_credentials(self):
        with pytest.raises(ConfigurationError) as exc_info:
            AppConfig().validate()

        message = str(exc_info.value)
        assert "GitHub token is required" in message
        assert "AI API key is required" in message

    def test_validate_without_llm(self):
        AppConfig(github=GitHubConfig(token="ghp_x")).validate(require_llm=False)

    def test_validate_rejects_bad_settings(self):
        config = AppConfig(
            github=GitHubConfig(token="ghp_x"),
            llm=LLMConfig(api_key="k", max_tokens=0),
            review=ReviewConfig(files_page_size=500, max_concurrency=0),
        )

        with pytest.raises(ConfigurationError) as exc_info:
            config.validate()

        message = str(exc_info.value)
        assert "max_tokens" in message
        assert "page size" in message
        assert "max_concurrency" in message

    def test_with_credentials_applies_non_empty_values(self):
        base = AppConfig(llm=LLMConfig(api_key="old", model="m1"))

        updated = base.with_credentials(github_token="ghp_new", api_key="new", model=None)

        assert updated.github.token == "ghp_new"
        assert updated.llm.api_key == "new"
        assert updated.llm.model == "m1"
        assert base.llm.api_key == "old"

    def test_config_is_read_only(self):
        config = AppConfig()
        with pytest.raises(Exception):
            config.github = GitHubConfig(token="x")

    def test_to_dict_excludes_secrets(self):
        config = AppConfig(
            github=GitHubConfig(token="ghp_secret"),
            llm=LLMConfig(api_key="sk-secret"),
        )

        data = config.to_dict()

        assert "token" not in data["github"]
        assert "api_key" not in data["llm"]
        assert data["review"]["fallback_batch_size"] == 10

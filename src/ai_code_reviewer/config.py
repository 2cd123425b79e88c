"""
Configuration Management

시스템 설정 관리. 설정은 프로세스 시작 시 한 번 로드되고 이후 읽기 전용으로 사용된다.
"""

import os
import dataclasses
import yaml
from dataclasses import dataclass
from typing import Optional, Dict, Any
from pathlib import Path
import logging


DEFAULT_MODEL = "deepseek/deepseek-chat-v3-0324"
DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"


class ConfigurationError(ValueError):
    """Invalid or incomplete configuration, raised before any network call."""


def _env_number(name: str, default: str, cast):
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None


def _section(cls, config_data: Dict[str, Any], name: str):
    values = config_data.get(name) or {}
    if not isinstance(values, dict):
        raise ConfigurationError(f"Config section '{name}' must be a mapping")

    known = {f.name for f in dataclasses.fields(cls)}
    unknown = sorted(str(key) for key in set(values) - known)
    if unknown:
        raise ConfigurationError(f"Unknown key(s) in config section '{name}': {', '.join(unknown)}")
    return cls(**values)


@dataclass(frozen=True)
class GitHubConfig:
    """GitHub API 설정"""
    token: Optional[str] = None
    api_base_url: str = "https://api.github.com"
    timeout_seconds: int = 30


@dataclass(frozen=True)
class LLMConfig:
    """Completion API 설정"""
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    max_tokens: int = 1000


@dataclass(frozen=True)
class ReviewConfig:
    """리뷰 파이프라인 설정"""
    fallback_batch_size: int = 10
    fallback_batch_delay: float = 1.0
    files_page_size: int = 100
    max_concurrency: int = 1


@dataclass(frozen=True)
class LoggingConfig:
    """로깅 설정"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass(frozen=True)
class AppConfig:
    """전체 애플리케이션 설정"""
    github: GitHubConfig = dataclasses.field(default_factory=GitHubConfig)
    llm: LLMConfig = dataclasses.field(default_factory=LLMConfig)
    review: ReviewConfig = dataclasses.field(default_factory=ReviewConfig)
    logging: LoggingConfig = dataclasses.field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """환경 변수에서 설정 로드"""
        return cls(
            github=GitHubConfig(
                token=os.getenv("GITHUB_TOKEN"),
                api_base_url=os.getenv("GITHUB_API_URL", "https://api.github.com"),
                timeout_seconds=_env_number("GITHUB_TIMEOUT", "30", int),
            ),
            llm=LLMConfig(
                api_key=os.getenv("OPENROUTER_API_KEY") or os.getenv("OPENAI_API_KEY"),
                model=os.getenv("AI_MODEL", DEFAULT_MODEL),
                base_url=os.getenv("AI_BASE_URL", DEFAULT_BASE_URL),
                max_tokens=_env_number("AI_MAX_TOKENS", "1000", int),
            ),
            review=ReviewConfig(
                fallback_batch_size=_env_number("FALLBACK_BATCH_SIZE", "10", int),
                fallback_batch_delay=_env_number("FALLBACK_BATCH_DELAY", "1.0", float),
                files_page_size=_env_number("FILES_PAGE_SIZE", "100", int),
                max_concurrency=_env_number("MAX_CONCURRENCY", "1", int),
            ),
            logging=LoggingConfig(
                level=os.getenv("LOG_LEVEL", "INFO"),
                format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
                file_path=os.getenv("LOG_FILE"),
                max_file_size=_env_number("LOG_MAX_SIZE", str(10 * 1024 * 1024), int),
                backup_count=_env_number("LOG_BACKUP_COUNT", "5", int),
            ),
        )

    @classmethod
    def from_yaml(cls, config_path: str) -> "AppConfig":
        """YAML 파일에서 설정 로드"""
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_file, 'r', encoding='utf-8') as f:
            try:
                config_data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a mapping")

        return cls(
            github=_section(GitHubConfig, config_data, 'github'),
            llm=_section(LLMConfig, config_data, 'llm'),
            review=_section(ReviewConfig, config_data, 'review'),
            logging=_section(LoggingConfig, config_data, 'logging'),
        )

    def with_credentials(
        self,
        github_token: Optional[str] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> "AppConfig":
        """
        Return a copy with credentials and model overrides applied.

        Only non-empty values replace the current ones.
        """
        github = self.github
        if github_token:
            github = dataclasses.replace(github, token=github_token)

        llm_overrides = {
            key: value
            for key, value in (('api_key', api_key), ('model', model), ('base_url', base_url))
            if value
        }
        llm = dataclasses.replace(self.llm, **llm_overrides) if llm_overrides else self.llm

        return dataclasses.replace(self, github=github, llm=llm)

    def validate(self, require_llm: bool = True) -> None:
        """설정 유효성 검사"""
        errors = []

        # GitHub 토큰 필수 확인
        if not self.github.token:
            errors.append("GitHub token is required")

        if require_llm and not self.llm.api_key:
            errors.append("AI API key is required")

        if self.llm.max_tokens <= 0:
            errors.append("max_tokens must be positive")

        if self.review.fallback_batch_size <= 0:
            errors.append("Fallback batch size must be positive")

        if self.review.fallback_batch_delay < 0:
            errors.append("Fallback batch delay must be non-negative")

        if not 0 < self.review.files_page_size <= 100:
            errors.append("Files page size must be between 1 and 100")

        if self.review.max_concurrency <= 0:
            errors.append("max_concurrency must be positive")

        # 로그 레벨 검증
        valid_log_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if self.logging.level.upper() not in valid_log_levels:
            errors.append(f"Invalid log level: {self.logging.level}")

        if errors:
            raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}")

    def to_dict(self) -> Dict[str, Any]:
        """설정을 딕셔너리로 변환"""
        return {
            'github': {
                'api_base_url': self.github.api_base_url,
                'timeout_seconds': self.github.timeout_seconds,
                # 보안상 토큰은 제외
            },
            'llm': {
                'model': self.llm.model,
                'base_url': self.llm.base_url,
                'max_tokens': self.llm.max_tokens,
            },
            'review': dataclasses.asdict(self.review),
            'logging': dataclasses.asdict(self.logging),
        }


def setup_logging(config: LoggingConfig) -> None:
    """로깅 설정"""
    logging.basicConfig(
        level=getattr(logging, config.level.upper()),
        format=config.format,
    )

    # 파일 로깅이 설정된 경우 로테이션 설정
    if config.file_path:
        from logging.handlers import RotatingFileHandler

        handler = RotatingFileHandler(
            config.file_path,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
        )
        handler.setFormatter(logging.Formatter(config.format))

        # 루트 로거에 핸들러 추가
        root_logger = logging.getLogger()
        root_logger.addHandler(handler)

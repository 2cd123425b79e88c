"""
Credential Store

Stores the GitHub token and AI API keys in a JSON file under the
user's home directory, falling back to environment variables.
"""

import os
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional


logger = logging.getLogger(__name__)

DEFAULT_CREDENTIALS_PATH = Path.home() / '.ai-code-reviewer' / 'config.json'
GITHUB_TOKEN_PREFIXES = ('ghp_', 'github_pat_')


def is_valid_github_token(token: Optional[str]) -> bool:
    """Classic (`ghp_`) and fine-grained (`github_pat_`) personal access tokens."""
    return bool(token) and token.startswith(GITHUB_TOKEN_PREFIXES)


class CredentialStore:
    """JSON-file credential storage."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else DEFAULT_CREDENTIALS_PATH
        self.data: Dict[str, str] = {}

    def load(self) -> Dict[str, str]:
        """Load stored credentials; a missing or unreadable file yields no data."""
        self.data = {}
        if not self.path.exists():
            return self.data

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to load credentials from {self.path}: {e}")
            return self.data

        if isinstance(loaded, dict):
            self.data = loaded
        return self.data

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(self.data, f, indent=2)

    def _set(self, key: str, value: str) -> None:
        self.data[key] = value
        self.data['lastUpdated'] = datetime.now().isoformat()
        self.save()

    def set_github_token(self, token: str) -> None:
        self._set('githubToken', token)

    def set_openrouter_api_key(self, key: str) -> None:
        self._set('openrouterApiKey', key)

    def set_openai_api_key(self, key: str) -> None:
        self._set('openaiApiKey', key)

    def get_github_token(self) -> Optional[str]:
        return self.data.get('githubToken') or os.getenv('GITHUB_TOKEN')

    def get_openrouter_api_key(self) -> Optional[str]:
        return self.data.get('openrouterApiKey') or os.getenv('OPENROUTER_API_KEY')

    def get_openai_api_key(self) -> Optional[str]:
        return self.data.get('openaiApiKey') or os.getenv('OPENAI_API_KEY')

    def get_api_key(self) -> Optional[str]:
        """OpenRouter key first, then OpenAI."""
        return self.get_openrouter_api_key() or self.get_openai_api_key()

    def clear(self) -> None:
        self.data = {}
        if self.path.exists():
            self.path.unlink()

    def summary(self) -> Dict[str, object]:
        """Which credentials are stored, without their values."""
        return {
            'github_token': bool(self.data.get('githubToken')),
            'openrouter_api_key': bool(self.data.get('openrouterApiKey')),
            'openai_api_key': bool(self.data.get('openaiApiKey')),
            'last_updated': self.data.get('lastUpdated'),
        }

"""
Command Line Interface

`ai-code-reviewer` entry point: credential management, GitHub lookups
and AI review of pull requests.
"""

import json
import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn, Optional, Tuple

import click

from . import __version__
from .api import AIReviewerAPI, ReviewRequest
from .config import AppConfig, ConfigurationError, setup_logging
from .credentials import CredentialStore, is_valid_github_token
from .formatting.report import ReportFormatter
from .github.client import GitHubAPIError, GitHubClient
from .github.parser import InvalidRepositoryError, parse_repository_url
from .models.github import BranchInfo, PullRequestInfo, RepositoryInfo
from .models.review import AnalysisResult


logger = logging.getLogger(__name__)

NO_TOKEN_MESSAGE = 'No GitHub token found. Please run "login" first.'


@dataclass
class CLIState:
    config: AppConfig
    store: CredentialStore
    formatter: ReportFormatter

    @property
    def github_token(self) -> Optional[str]:
        return self.store.get_github_token() or self.config.github.token

    def github_client(self, token: str) -> GitHubClient:
        return GitHubClient(
            token,
            base_url=self.config.github.api_base_url,
            timeout=self.config.github.timeout_seconds,
        )


def _info(message: str) -> None:
    click.echo(f"ℹ️  {message}")


def _success(message: str) -> None:
    click.secho(f"✅ {message}", fg='green')


def _fail(message: str) -> NoReturn:
    click.secho(f"❌ {message}", fg='red', err=True)
    raise click.exceptions.Exit(1)


def _require_token(state: CLIState) -> str:
    token = state.github_token
    if not token:
        _fail(NO_TOKEN_MESSAGE)
    return token


def _resolve_repository(repo_url: str) -> Tuple[str, str]:
    try:
        return parse_repository_url(repo_url)
    except InvalidRepositoryError as e:
        _fail(f"Invalid repository: {e}")


async def _run_analysis(config: AppConfig, request: ReviewRequest) -> AnalysisResult:
    async with AIReviewerAPI(config) as api:
        return await api.analyze_pr(request)


@click.group()
@click.version_option(__version__, prog_name='ai-code-reviewer')
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False),
              help='YAML configuration file (defaults to environment variables).')
@click.option('--credentials', 'credentials_path', type=click.Path(dir_okay=False),
              envvar='AI_CODE_REVIEWER_CREDENTIALS',
              help='Credential file (default: ~/.ai-code-reviewer/config.json).')
@click.pass_context
def main(ctx: click.Context, config_path: Optional[str], credentials_path: Optional[str]) -> None:
    """AI-powered code review tool for GitHub PRs."""
    try:
        config = AppConfig.from_yaml(config_path) if config_path else AppConfig.from_env()
    except ConfigurationError as e:
        _fail(f"Invalid configuration: {e}")
    setup_logging(config.logging)

    store = CredentialStore(Path(credentials_path) if credentials_path else None)
    store.load()

    ctx.obj = CLIState(config=config, store=store, formatter=ReportFormatter())


@main.command()
@click.pass_obj
def login(state: CLIState) -> None:
    """Authenticate with GitHub."""
    _info("Starting GitHub authentication...")
    token = click.prompt(
        'Enter your GitHub Personal Access Token (needs "repo" and "pull-request" scopes)',
        hide_input=True,
    )
    if not is_valid_github_token(token):
        _fail("Invalid GitHub token format")

    state.store.set_github_token(token)

    verified, user = state.github_client(token).test_authentication()
    if not verified:
        _fail("Token verification failed")
    _success(f"Token verified for user: {user.get('login')}")
    _success("Authentication successful!")


@main.command()
@click.pass_obj
def logout(state: CLIState) -> None:
    """Remove stored credentials."""
    state.store.clear()
    _success("Successfully logged out")


@main.command('config')
@click.pass_obj
def show_config(state: CLIState) -> None:
    """Display current configuration."""
    click.echo(state.formatter.format_credentials_summary(state.store.summary()))


@main.command('verify-token')
@click.pass_obj
def verify_token(state: CLIState) -> None:
    """Verify the stored GitHub token."""
    token = _require_token(state)
    verified, user = state.github_client(token).test_authentication()
    if not verified:
        _fail("Token verification failed")
    _success(f"Token verified for user: {user.get('login')}")


@main.command('repo:info')
@click.argument('repo_url')
@click.pass_obj
def repo_info(state: CLIState, repo_url: str) -> None:
    """Get information about a GitHub repository."""
    token = _require_token(state)
    owner, repo = _resolve_repository(repo_url)

    _info(f"Fetching repository info for {repo_url}...")
    try:
        data = state.github_client(token).get_repository_info(owner, repo)
    except GitHubAPIError as e:
        _fail(f"Failed to get repository info: {e}")

    click.echo(state.formatter.format_repository(RepositoryInfo.from_api(data)))


@main.command('repo:branches')
@click.argument('repo_url')
@click.pass_obj
def repo_branches(state: CLIState, repo_url: str) -> None:
    """List branches in a GitHub repository."""
    token = _require_token(state)
    owner, repo = _resolve_repository(repo_url)

    _info(f"Fetching branches for {repo_url}...")
    try:
        data = state.github_client(token).list_branches(owner, repo)
    except GitHubAPIError as e:
        _fail(f"Failed to list branches: {e}")

    click.echo(state.formatter.format_branches([BranchInfo.from_api(b) for b in data]))


@main.command('pr:info')
@click.argument('repo_url')
@click.argument('pr_number', type=int)
@click.pass_obj
def pr_info(state: CLIState, repo_url: str, pr_number: int) -> None:
    """Get information about a specific pull request."""
    token = _require_token(state)
    owner, repo = _resolve_repository(repo_url)

    _info(f"Fetching PR #{pr_number} info...")
    try:
        data = state.github_client(token).get_pull_request(owner, repo, pr_number)
    except GitHubAPIError as e:
        _fail(f"Failed to get PR info: {e}")

    click.echo(state.formatter.format_pull_request(PullRequestInfo.from_api(data)))


@main.command()
@click.argument('repo_url')
@click.argument('pr_number', type=int)
@click.option('--ai-key', help='AI API key (OpenRouter or OpenAI).')
@click.option('--ai-model', help='Model to use.')
@click.option('--ai-base-url', help='AI API base URL.')
@click.option('--json', 'as_json', is_flag=True, help='Print the result as JSON.')
@click.pass_obj
def analyze(
    state: CLIState,
    repo_url: str,
    pr_number: int,
    ai_key: Optional[str],
    ai_model: Optional[str],
    ai_base_url: Optional[str],
    as_json: bool,
) -> None:
    """Analyze a pull request with AI code review."""
    token = _require_token(state)

    api_key = ai_key or state.store.get_api_key() or state.config.llm.api_key
    if not api_key:
        api_key = click.prompt(
            'Enter your OpenRouter or OpenAI API Key',
            hide_input=True, default='', show_default=False,
        )
        if not api_key:
            _fail("AI API Key is required")

    owner, repo = _resolve_repository(repo_url)

    config = state.config.with_credentials(
        github_token=token, api_key=api_key, model=ai_model, base_url=ai_base_url
    )
    try:
        config.validate()
    except ConfigurationError as e:
        _fail(str(e))

    _info(f"Starting analysis of {owner}/{repo}#{pr_number}...")
    result = asyncio.run(_run_analysis(config, ReviewRequest(owner, repo, pr_number)))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        click.echo(state.formatter.format_analysis_result(result))

    if not result.success:
        raise click.exceptions.Exit(1)

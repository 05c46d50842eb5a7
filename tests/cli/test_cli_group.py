"""
Tests for the git-promote CLI group: options, help, manager construction.
"""

import pytest
from unittest.mock import Mock, patch
from click.testing import CliRunner

from git_promote import __version__
from git_promote.cli.commands import ALL_COMMANDS, ALIASES
from git_promote.cli.main import build_manager, create_cli_group
from git_promote.executor import RealGitExecutor, RecordingGitExecutor


@pytest.fixture
def mock_config():
    """Patch Config so no repository lookup happens."""
    with patch('git_promote.cli.main.Config') as mock_config_class:
        config = Mock()
        config.base_dir = '/work/repo'
        config.remote = 'origin'
        config.git_executable = 'git'
        mock_config_class.return_value = config
        yield mock_config_class


class TestBuildManager:
    """Test build_manager()."""

    def test_real_executor(self, mock_config):
        manager = build_manager('/work/repo')

        assert isinstance(manager.executor, RealGitExecutor)
        assert manager.executor.base_dir == '/work/repo'
        assert manager.remote == 'origin'
        mock_config.assert_called_once_with('/work/repo')

    def test_dry_run_uses_recording_executor(self, mock_config):
        manager = build_manager(dry_run=True)

        assert isinstance(manager.executor, RecordingGitExecutor)
        assert manager.executor.echo is True

    def test_configured_remote(self, mock_config):
        mock_config.return_value.remote = 'upstream'

        assert build_manager().remote == 'upstream'


class TestCliGroup:
    """Test group level behaviour."""

    def test_every_alias_points_to_a_command(self):
        assert set(ALIASES.values()) == set(ALL_COMMANDS)

    def test_help_lists_commands(self):
        result = CliRunner().invoke(create_cli_group(), ['--help'])

        assert result.exit_code == 0
        for name in ALL_COMMANDS:
            assert name in result.output
        assert 'Short aliases' in result.output

    def test_version(self):
        result = CliRunner().invoke(create_cli_group(), ['--version'])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_dry_run_prints_commands(self, mock_config):
        result = CliRunner().invoke(create_cli_group(), ['--dry-run', 'cfb', 'x'])

        assert result.exit_code == 0, result.output
        assert 'Would execute: git checkout Development' in result.output
        assert 'Would execute: git checkout -b feature/x' in result.output
        assert 'Executing:' not in result.output

    def test_repo_dir_option(self, mock_config, tmp_path):
        with patch('git_promote.cli.main.RealGitExecutor') as mock_executor_class:
            result = CliRunner().invoke(create_cli_group(), ['-C', str(tmp_path), 'ud'])

        assert result.exit_code == 0, result.output
        mock_config.assert_called_once_with(str(tmp_path))
        mock_executor_class.assert_called_once_with('/work/repo', 'git')

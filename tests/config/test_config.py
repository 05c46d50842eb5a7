"""
Tests for Config (.git-promote file) and base directory discovery.
"""

from unittest.mock import patch

from git.exc import InvalidGitRepositoryError

from git_promote.config import Config, find_base_dir


class TestFindBaseDir:
    """Test find_base_dir()."""

    @patch('git_promote.config.git.Repo')
    def test_work_tree_root(self, mock_repo_class, tmp_path):
        mock_repo_class.return_value.working_tree_dir = str(tmp_path)
        sub_dir = tmp_path / 'src'
        sub_dir.mkdir()

        assert find_base_dir(str(sub_dir)) == str(tmp_path)
        mock_repo_class.assert_called_once_with(str(sub_dir), search_parent_directories=True)

    @patch('git_promote.config.git.Repo')
    def test_outside_repository(self, mock_repo_class, tmp_path):
        mock_repo_class.side_effect = InvalidGitRepositoryError(str(tmp_path))

        assert find_base_dir(str(tmp_path)) == str(tmp_path)


class TestConfig:
    """Test Config reading."""

    @patch('git_promote.config.find_base_dir')
    def test_defaults_without_file(self, mock_find, tmp_path):
        mock_find.return_value = str(tmp_path)

        config = Config(str(tmp_path))

        assert config.base_dir == str(tmp_path)
        assert config.remote == 'origin'
        assert config.git_executable == 'git'

    @patch('git_promote.config.find_base_dir')
    def test_reads_file(self, mock_find, tmp_path):
        mock_find.return_value = str(tmp_path)
        (tmp_path / '.git-promote').write_text(
            "[git-promote]\n"
            "remote = upstream\n"
            "git_executable = /opt/git/bin/git\n",
            encoding='utf-8')

        config = Config(str(tmp_path))

        assert config.remote == 'upstream'
        assert config.git_executable == '/opt/git/bin/git'

    @patch('git_promote.config.find_base_dir')
    def test_partial_file(self, mock_find, tmp_path):
        mock_find.return_value = str(tmp_path)
        (tmp_path / '.git-promote').write_text("[git-promote]\nremote = fork\n", encoding='utf-8')

        config = Config(str(tmp_path))

        assert config.remote == 'fork'
        assert config.git_executable == 'git'

    @patch('git_promote.config.find_base_dir')
    def test_file_without_section(self, mock_find, tmp_path):
        mock_find.return_value = str(tmp_path)
        (tmp_path / '.git-promote').write_text("[other]\nremote = fork\n", encoding='utf-8')

        config = Config(str(tmp_path))

        assert config.remote == 'origin'

    @patch('git_promote.config.find_base_dir')
    def test_empty_values_fall_back_to_defaults(self, mock_find, tmp_path):
        mock_find.return_value = str(tmp_path)
        (tmp_path / '.git-promote').write_text(
            "[git-promote]\nremote =\ngit_executable =\n", encoding='utf-8')

        config = Config(str(tmp_path))

        assert config.remote == 'origin'
        assert config.git_executable == 'git'

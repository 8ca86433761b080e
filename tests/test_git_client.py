"""
Tests for the git-backed version control client.
"""

from pathlib import Path
from unittest.mock import Mock, patch

import pytest
from git.exc import GitCommandError, GitCommandNotFound

from submodule_updater.git_client import GitClient, parse_submodule_status
from submodule_updater.models import GitRepositoryError, SubmoduleError


STATUS_OUTPUT = (
    " 1a2b3c4d5e6f7a8b9c0d1e2f3a4b5c6d7e8f9a0b libs/alpha (v1.0.0)\n"
    "-0f9e8d7c6b5a4f3e2d1c0b9a8f7e6d5c4b3a2f1e libs/beta\n"
    "+abcdefabcdefabcdefabcdefabcdefabcdefabcd vendor/gamma (heads/main)\n"
    "\n"
)


class TestParseSubmoduleStatus:
    """Path extraction from `git submodule status`."""

    def test_extracts_second_field(self):
        assert parse_submodule_status(STATUS_OUTPUT) == ["libs/alpha", "libs/beta", "vendor/gamma"]

    def test_empty_output(self):
        assert parse_submodule_status("") == []
        assert parse_submodule_status("\n  \n") == []

    def test_skips_lines_with_single_field(self):
        assert parse_submodule_status("garbage\n 1234 lib (x)\n") == ["lib"]

    def test_conflict_marker(self):
        assert parse_submodule_status("U0000000000000000000000000000000000000000 lib\n") == ["lib"]


class TestGitClient:
    """GitClient operations with git mocked out."""

    def setup_method(self):
        self.runner = Mock()
        self.runner.last_error = None

    @patch("submodule_updater.git_client.Git")
    def test_get_root_dir(self, mock_git_class, tmp_path):
        mock_git_class.return_value.rev_parse.return_value = f"{tmp_path}\n"
        client = GitClient(self.runner, tmp_path)

        assert client.get_root_dir() == Path(str(tmp_path))
        mock_git_class.assert_called_once_with(str(tmp_path.resolve()))
        mock_git_class.return_value.rev_parse.assert_called_once_with("--show-toplevel")

    @patch("submodule_updater.git_client.Git")
    def test_get_root_dir_not_a_repository(self, mock_git_class, tmp_path):
        mock_git_class.return_value.rev_parse.side_effect = GitCommandError(
            ["git", "rev-parse", "--show-toplevel"], 128, "fatal: not a git repository"
        )
        client = GitClient(self.runner, tmp_path)

        with pytest.raises(GitRepositoryError) as exc_info:
            client.get_root_dir()
        assert "not a git repository" in str(exc_info.value)

    @patch("submodule_updater.git_client.Git")
    def test_get_root_dir_git_missing(self, mock_git_class, tmp_path):
        mock_git_class.return_value.rev_parse.side_effect = GitCommandNotFound(
            "git", FileNotFoundError("git")
        )
        client = GitClient(self.runner, tmp_path)

        with pytest.raises(GitRepositoryError):
            client.get_root_dir()

    @patch("submodule_updater.git_client.Git")
    def test_get_root_dir_empty_output(self, mock_git_class, tmp_path):
        mock_git_class.return_value.rev_parse.return_value = ""
        client = GitClient(self.runner, tmp_path)

        with pytest.raises(GitRepositoryError):
            client.get_root_dir()

    def test_defaults_to_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        client = GitClient(self.runner)
        assert client.start_path == tmp_path.resolve()

    @patch("submodule_updater.git_client.Git")
    def test_list_submodules(self, mock_git_class, tmp_path):
        mock_git_class.return_value.submodule.return_value = STATUS_OUTPUT
        client = GitClient(self.runner, tmp_path)

        assert client.list_submodules(tmp_path) == ["libs/alpha", "libs/beta", "vendor/gamma"]
        mock_git_class.assert_called_once_with(str(tmp_path))
        mock_git_class.return_value.submodule.assert_called_once_with("status")

    @patch("submodule_updater.git_client.Git")
    def test_list_submodules_failure(self, mock_git_class, tmp_path):
        mock_git_class.return_value.submodule.side_effect = GitCommandError(
            ["git", "submodule", "status"], 1, "fatal: no submodule mapping found"
        )
        client = GitClient(self.runner, tmp_path)

        with pytest.raises(SubmoduleError):
            client.list_submodules(tmp_path)

    def test_init_submodules(self, tmp_path):
        self.runner.run.return_value = True
        client = GitClient(self.runner, tmp_path)

        client.init_submodules(tmp_path)
        self.runner.run.assert_called_once_with(
            tmp_path, "git", "submodule", "update", "--init", "--recursive", "--progress"
        )

    def test_init_submodules_failure(self, tmp_path):
        self.runner.run.return_value = False
        self.runner.last_error = "exit status 1"
        client = GitClient(self.runner, tmp_path)

        with pytest.raises(SubmoduleError) as exc_info:
            client.init_submodules(tmp_path)
        assert "exit status 1" in str(exc_info.value)

    def test_fetch_and_checkout(self, tmp_path):
        self.runner.run.return_value = True
        client = GitClient(self.runner, tmp_path)
        sub = tmp_path / "libs" / "alpha"

        assert client.fetch_all(sub) is True
        assert client.checkout(sub, "v1.2.3") is True
        assert self.runner.run.call_args_list[0].args == (sub, "git", "fetch", "--all", "--tags")
        assert self.runner.run.call_args_list[1].args == (sub, "git", "checkout", "v1.2.3")

    def test_update_remote_batches_paths(self, tmp_path):
        self.runner.run.return_value = False
        self.runner.last_error = "exit status 1"
        client = GitClient(self.runner, tmp_path)

        assert client.update_remote(tmp_path, ["libs/alpha", "libs/beta"]) is False
        self.runner.run.assert_called_once_with(
            tmp_path, "git", "submodule", "update", "--remote", "--", "libs/alpha", "libs/beta"
        )
        assert client.last_error == "exit status 1"

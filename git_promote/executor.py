"""
Command executors for git-promote.

Provides the GitCommandExecutor interface used by WorkflowManager, with:
- RealGitExecutor: runs the real git binary, output streamed to the terminal
- RecordingGitExecutor: records calls and simulates outcomes (tests, dry-run)
"""

import os
import subprocess
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple

import git
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError


class GitCommandExecutor(ABC):
    """
    Interface between WorkflowManager and the version-control backend.

    Implementations must raise GitCommandError when a command fails.
    """

    @abstractmethod
    def run(self, *args: str) -> None:
        """
        Run a git command.

        Args:
            *args: git arguments (e.g., "checkout", "Development")

        Raises:
            GitCommandError: If git exits with a non-zero status
        """

    @abstractmethod
    def is_working_tree_clean(self) -> bool:
        """
        Report whether the working tree has no pending changes.

        Untracked, modified and staged files all count as changes.

        Returns:
            bool: True if clean, False otherwise

        Raises:
            GitCommandError: If the status cannot be queried at all
        """


class RealGitExecutor(GitCommandExecutor):
    "Runs git as a subprocess in base_dir."

    def __init__(self, base_dir: Optional[str] = None, git_executable: str = 'git'):
        self.__base_dir = base_dir
        self.__git_executable = git_executable

    @property
    def base_dir(self) -> str:
        return self.__base_dir or os.path.abspath(os.path.curdir)

    def run(self, *args: str) -> None:
        command = [self.__git_executable, *args]
        print(f"Executing: git {' '.join(args)}")
        try:
            # stdout/stderr are inherited so the operator sees git's own output
            result = subprocess.run(command, cwd=self.__base_dir, check=False)
        except OSError as e:
            raise GitCommandError(command, 127, stderr=str(e)) from e
        if result.returncode != 0:
            raise GitCommandError(command, result.returncode)

    def is_working_tree_clean(self) -> bool:
        try:
            git_repo = git.Repo(self.base_dir, search_parent_directories=True)
            return not git_repo.is_dirty(untracked_files=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise GitCommandError(
                "git status --porcelain", 128,
                stderr=f"not a git repository: {e}") from e


class RecordingGitExecutor(GitCommandExecutor):
    """
    Substitute executor that never touches a repository.

    Every call is appended to `calls`. Failures are programmed by argument
    prefix: fail_on("merge") makes every merge fail, fail_on("checkout",
    "Nightly") only the checkout of Nightly.

    Examples:
        executor = RecordingGitExecutor()
        executor.fail_on("pull", "origin", "Development", stderr="conflict")
        WorkflowManager(executor).update_development()  # raises WorkflowError
        executor.calls
        # [('checkout', 'Development'), ('pull', 'origin', 'Development')]
    """

    STATUS_CALL = ('status', '--porcelain')

    def __init__(self, clean: bool = True,
                 failures: Optional[Dict[Tuple[str, ...], str]] = None,
                 status_error: Optional[str] = None,
                 echo: bool = False):
        self.clean = clean
        self.failures: Dict[Tuple[str, ...], str] = dict(failures or {})
        self.status_error = status_error
        self.echo = echo
        self.calls: List[Tuple[str, ...]] = []

    def fail_on(self, *prefix: str, stderr: str = 'simulated failure') -> 'RecordingGitExecutor':
        "Registers a failure for every command starting with prefix."
        self.failures[tuple(prefix)] = stderr
        return self

    def reset(self) -> None:
        "Clears the call log."
        self.calls = []

    def _failure_for(self, args: Sequence[str]) -> Optional[str]:
        for prefix, stderr in self.failures.items():
            if tuple(args[:len(prefix)]) == prefix:
                return stderr
        return None

    def run(self, *args: str) -> None:
        self.calls.append(tuple(args))
        if self.echo:
            print(f"Would execute: git {' '.join(args)}")
        stderr = self._failure_for(args)
        if stderr is not None:
            raise GitCommandError(['git', *args], 1, stderr=stderr)

    def is_working_tree_clean(self) -> bool:
        self.calls.append(self.STATUS_CALL)
        if self.status_error is not None:
            raise GitCommandError(['git', *self.STATUS_CALL], 128, stderr=self.status_error)
        return self.clean

"""
Shared pytest fixtures for git_promote tests.
"""

from datetime import date

import pytest

from git_promote.executor import RecordingGitExecutor
from git_promote.workflow_manager import WorkflowManager

FIXED_DATE = date(2024, 3, 7)


@pytest.fixture
def recording_executor():
    """Substitute executor where every command succeeds and the tree is clean."""
    return RecordingGitExecutor()


@pytest.fixture
def workflow_manager(recording_executor):
    """
    Create WorkflowManager on the recording executor.

    The date is frozen to 2024-03-07 so tags and messages are predictable.
    """
    manager = WorkflowManager(recording_executor, today=lambda: FIXED_DATE)
    return manager, recording_executor

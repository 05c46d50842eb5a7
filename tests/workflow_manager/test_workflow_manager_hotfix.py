"""
Tests for WorkflowManager hotfix workflows.

Focused on testing:
- create_hotfix(): hotfix/<name> from main, pushed
- update_main_with_hotfix(): merge into main and Development,
  best-effort deletion of the hotfix branch
"""

import pytest

from git_promote.workflow_manager import WorkflowError

CREATE_HOTFIX_SEQUENCE = [
    ('checkout', 'main'),
    ('pull', 'origin', 'main'),
    ('checkout', '-b', 'hotfix/crash'),
    ('push', 'origin', 'hotfix/crash'),
]

UPDATE_MAIN_SEQUENCE = [
    ('checkout', 'main'),
    ('merge', 'hotfix/crash', '--no-ff'),
    ('push', 'origin', 'main'),
    ('checkout', 'Development'),
    ('merge', 'hotfix/crash', '--no-ff', '-m', 'chore: Forward-port hotfix/crash to Development'),
    ('push', 'origin', 'Development'),
    ('branch', '-d', 'hotfix/crash'),
    ('push', 'origin', '--delete', 'hotfix/crash'),
]


class TestCreateHotfix:
    """Test create_hotfix()."""

    def test_create_hotfix_sequence(self, workflow_manager):
        manager, executor = workflow_manager

        branch = manager.create_hotfix('crash')

        assert branch == 'hotfix/crash'
        assert executor.calls == CREATE_HOTFIX_SEQUENCE

    @pytest.mark.parametrize('failing_index', range(len(CREATE_HOTFIX_SEQUENCE) - 1))
    def test_failure_stops_remaining_steps(self, workflow_manager, failing_index):
        manager, executor = workflow_manager
        executor.fail_on(*CREATE_HOTFIX_SEQUENCE[failing_index])

        with pytest.raises(WorkflowError):
            manager.create_hotfix('crash')

        assert executor.calls == CREATE_HOTFIX_SEQUENCE[:failing_index + 1]

    def test_push_failure(self, workflow_manager):
        manager, executor = workflow_manager
        executor.fail_on('push')

        with pytest.raises(WorkflowError) as exc_info:
            manager.create_hotfix('crash')

        assert 'failed to push hotfix branch to remote' in str(exc_info.value)


class TestUpdateMainWithHotfix:
    """Test update_main_with_hotfix()."""

    def test_update_main_sequence(self, workflow_manager):
        manager, executor = workflow_manager

        manager.update_main_with_hotfix('hotfix/crash')

        assert executor.calls == UPDATE_MAIN_SEQUENCE

    def test_local_delete_failure_is_a_warning(self, workflow_manager, capsys):
        manager, executor = workflow_manager
        executor.fail_on('branch', '-d', stderr='not fully merged')

        manager.update_main_with_hotfix('hotfix/crash')

        err = capsys.readouterr().err
        assert 'Warning: Failed to delete local hotfix branch hotfix/crash' in err
        # Remote deletion is still attempted
        assert executor.calls == UPDATE_MAIN_SEQUENCE

    def test_remote_delete_failure_is_a_warning(self, workflow_manager, capsys):
        manager, executor = workflow_manager
        executor.fail_on('push', 'origin', '--delete', stderr='remote ref does not exist')

        manager.update_main_with_hotfix('hotfix/crash')

        err = capsys.readouterr().err
        assert 'Warning: Failed to delete remote hotfix branch hotfix/crash' in err
        assert 'remote ref does not exist' in err

    def test_both_delete_failures_still_succeed(self, workflow_manager, capsys):
        manager, executor = workflow_manager
        executor.fail_on('branch').fail_on('push', 'origin', '--delete')

        manager.update_main_with_hotfix('hotfix/crash')

        err = capsys.readouterr().err
        assert err.count('Warning:') == 2

    def test_main_merge_conflict_stops_everything(self, workflow_manager):
        manager, executor = workflow_manager
        executor.fail_on('merge')

        with pytest.raises(WorkflowError) as exc_info:
            manager.update_main_with_hotfix('hotfix/crash')

        assert exc_info.value.is_conflict
        assert 'hotfix merge to main' in str(exc_info.value)
        assert executor.calls == UPDATE_MAIN_SEQUENCE[:2]

    def test_forward_port_conflict_keeps_hotfix_branch(self, workflow_manager):
        manager, executor = workflow_manager
        executor.fail_on('merge', 'hotfix/crash', '--no-ff', '-m')

        with pytest.raises(WorkflowError) as exc_info:
            manager.update_main_with_hotfix('hotfix/crash')

        assert 'forward-port to Development' in str(exc_info.value)
        assert 'git push origin Development' in str(exc_info.value)
        assert executor.calls == UPDATE_MAIN_SEQUENCE[:5]

    def test_development_push_failure_skips_cleanup(self, workflow_manager):
        manager, executor = workflow_manager
        executor.fail_on('push', 'origin', 'Development')

        with pytest.raises(WorkflowError):
            manager.update_main_with_hotfix('hotfix/crash')

        assert ('branch', '-d', 'hotfix/crash') not in executor.calls

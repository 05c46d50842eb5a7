"""
Feature branch commands: create-feature-branch, update-feature-branch,
consume-feature.
"""

import click

from git_promote.workflow_manager import WorkflowManager, WorkflowManagerError


@click.command('create-feature-branch')
@click.argument('feature_name', type=str)
@click.pass_obj
def create_feature_branch(manager: WorkflowManager, feature_name: str) -> None:
    """
    Create new feature branch from Development.

    Creates feature/FEATURE_NAME at the tip of the local Development branch
    and switches to it. The branch is not pushed.

    Examples:
        $ git-promote create-feature-branch login-form
        $ git-promote cfb login-form
    """
    try:
        branch = manager.create_feature_branch(feature_name)
    except WorkflowManagerError as e:
        raise click.ClickException(str(e))
    except Exception as e:
        raise click.ClickException(f"Unexpected error: {e}")

    click.echo(f"✓ Switched to new branch: {branch}")
    click.secho("\nOperation completed successfully!", fg='green')


@click.command('update-feature-branch')
@click.argument('feature_branch', type=str)
@click.pass_obj
def update_feature_branch(manager: WorkflowManager, feature_branch: str) -> None:
    """
    Update feature branch with latest development changes.

    Fetches origin, merges origin/development into FEATURE_BRANCH and pushes
    it. On conflict the branch is left for manual resolution.

    Examples:
        $ git-promote update-feature-branch feature/login-form
    """
    try:
        manager.update_feature_branch(feature_branch)
    except WorkflowManagerError as e:
        raise click.ClickException(str(e))
    except Exception as e:
        raise click.ClickException(f"Unexpected error: {e}")

    click.secho("\nOperation completed successfully!", fg='green')


@click.command('consume-feature')
@click.argument('feature_branch', type=str)
@click.pass_obj
def consume_feature(manager: WorkflowManager, feature_branch: str) -> None:
    """
    Consume feature branch into Development.

    Pulls both branches, merges Development into FEATURE_BRANCH, then
    FEATURE_BRANCH into Development, and pushes Development.

    Examples:
        $ git-promote consume-feature feature/login-form
        $ git-promote cf feature/login-form
    """
    try:
        manager.consume_feature(feature_branch)
    except WorkflowManagerError as e:
        raise click.ClickException(str(e))
    except Exception as e:
        raise click.ClickException(f"Unexpected error: {e}")

    click.secho("\nOperation completed successfully!", fg='green')

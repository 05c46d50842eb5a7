"""
Hotfix commands: create-hotfix, update-main-with-hotfix.
"""

import click

from git_promote.workflow_manager import WorkflowManager, WorkflowManagerError


@click.command('create-hotfix')
@click.argument('hotfix_name', type=str)
@click.pass_obj
def create_hotfix(manager: WorkflowManager, hotfix_name: str) -> None:
    """
    Create hotfix branch from main.

    Pulls main, creates hotfix/HOTFIX_NAME from it and pushes the new branch.

    Examples:
        $ git-promote create-hotfix fix-login-crash
        $ git-promote ch fix-login-crash
    """
    try:
        branch = manager.create_hotfix(hotfix_name)
    except WorkflowManagerError as e:
        raise click.ClickException(str(e))
    except Exception as e:
        raise click.ClickException(f"Unexpected error: {e}")

    click.echo(f"✓ Hotfix branch pushed: {branch}")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Commit the fix on the hotfix branch")
    click.echo(f"  2. Run: git-promote update-main-with-hotfix {branch}")
    click.secho("\nOperation completed successfully!", fg='green')


@click.command('update-main-with-hotfix')
@click.argument('hotfix_branch', type=str)
@click.pass_obj
def update_main_with_hotfix(manager: WorkflowManager, hotfix_branch: str) -> None:
    """
    Update main with hotfix and forward-port.

    Merges HOTFIX_BRANCH into main and into Development (both --no-ff),
    pushes both, then deletes the hotfix branch locally and on origin.
    Deletion failures are only reported as warnings.

    Examples:
        $ git-promote update-main-with-hotfix hotfix/fix-login-crash
    """
    try:
        manager.update_main_with_hotfix(hotfix_branch)
    except WorkflowManagerError as e:
        raise click.ClickException(str(e))
    except Exception as e:
        raise click.ClickException(f"Unexpected error: {e}")

    click.secho("\nOperation completed successfully!", fg='green')

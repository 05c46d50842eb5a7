"""
Development branch commands: update-development, sync-development-with-main.
"""

import click

from git_promote.workflow_manager import WorkflowManager, WorkflowManagerError


@click.command('update-development')
@click.pass_obj
def update_development(manager: WorkflowManager) -> None:
    """
    Update Development branch with latest changes.

    Checks out Development and pulls origin/Development. If the pull fails,
    conflict resolution instructions are printed.
    """
    try:
        manager.update_development()
    except WorkflowManagerError as e:
        raise click.ClickException(str(e))
    except Exception as e:
        raise click.ClickException(f"Unexpected error: {e}")

    click.secho("\nOperation completed successfully!", fg='green')


@click.command('sync-development-with-main')
@click.confirmation_option(
    '--yes', '-y',
    prompt='This resets Development to origin/main and force-pushes it. Continue?',
    help='Do not ask for confirmation'
)
@click.pass_obj
def sync_development_with_main(manager: WorkflowManager) -> None:
    """
    Sync Development with main (backup and reset).

    Tags the current Development as backup/development-YYYYMMDD, pushes the
    tags, hard resets Development to origin/main and force-pushes it.

    The previous remote Development history is only kept by the backup tag.
    """
    try:
        backup_tag = manager.sync_development_with_main()
    except WorkflowManagerError as e:
        raise click.ClickException(str(e))
    except Exception as e:
        raise click.ClickException(f"Unexpected error: {e}")

    click.echo(f"✓ Previous Development saved as tag: {backup_tag}")
    click.secho("\nOperation completed successfully!", fg='green')

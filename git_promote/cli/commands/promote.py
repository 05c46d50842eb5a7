"""
Promotion commands: promote-basic, promote-validated, development-to-release.
"""

from typing import Optional

import click

from git_promote.workflow_manager import WorkflowManager, WorkflowManagerError


@click.command('promote-basic')
@click.pass_obj
def promote_basic(manager: WorkflowManager) -> None:
    """
    Promote Development to Nightly (basic version).

    Pulls Development and Nightly, then merges origin/Development into
    Nightly (fast-forward when possible) and pushes Nightly.
    """
    try:
        manager.promote_basic()
    except WorkflowManagerError as e:
        raise click.ClickException(str(e))
    except Exception as e:
        raise click.ClickException(f"Unexpected error: {e}")

    click.secho("\nOperation completed successfully!", fg='green')


@click.command('promote-validated')
@click.pass_obj
def promote_validated(manager: WorkflowManager) -> None:
    """
    Promote Development to Nightly with validation.

    Refuses to run when Development has uncommitted changes. Nightly always
    gets an explicit merge commit (--no-ff).
    """
    try:
        manager.promote_validated()
    except WorkflowManagerError as e:
        raise click.ClickException(str(e))
    except Exception as e:
        raise click.ClickException(f"Unexpected error: {e}")

    click.secho("\nOperation completed successfully!", fg='green')


@click.command('development-to-release')
@click.argument('version_tag', type=str, required=False, default=None)
@click.pass_obj
def development_to_release(manager: WorkflowManager, version_tag: Optional[str] = None) -> None:
    """
    Promote Development to Release (optional version tag).

    Creates Release from Development if it does not exist, merges
    Development into it with a dated merge commit and pushes it. When
    VERSION_TAG is given, an annotated tag is created and tags are pushed.

    Examples:
        $ git-promote development-to-release
        $ git-promote dr v1.4.0
    """
    try:
        manager.development_to_release(version_tag)
    except WorkflowManagerError as e:
        raise click.ClickException(str(e))
    except Exception as e:
        raise click.ClickException(f"Unexpected error: {e}")

    if version_tag:
        click.echo(f"✓ Release tagged: {version_tag}")
    click.secho("\nOperation completed successfully!", fg='green')

"""
Main CLI module - Creates and configures the CLI group
"""

from typing import Optional

import click

from git_promote import __version__
from git_promote.config import Config
from git_promote.executor import RealGitExecutor, RecordingGitExecutor
from git_promote.workflow_manager import WorkflowManager
from .commands import ALL_COMMANDS, ALIASES


class AliasedGroup(click.Group):
    """Group resolving the short command names (ub, cf, dr, ...)."""

    def get_command(self, ctx, cmd_name):
        cmd_name = ALIASES.get(cmd_name, cmd_name)
        return super().get_command(ctx, cmd_name)

    def resolve_command(self, ctx, args):
        # Report the full command name, not the alias
        _, cmd, args = super().resolve_command(ctx, args)
        return cmd.name if cmd else None, cmd, args


def build_manager(repo_dir: Optional[str] = None, dry_run: bool = False) -> WorkflowManager:
    """
    Build the WorkflowManager used by the commands.

    Args:
        repo_dir: Directory inside the repository (default: current directory)
        dry_run: Print the git commands instead of running them
    """
    config = Config(repo_dir)
    if dry_run:
        executor = RecordingGitExecutor(echo=True)
    else:
        executor = RealGitExecutor(config.base_dir, config.git_executable)
    return WorkflowManager(executor, remote=config.remote)


def _aliases_epilog() -> str:
    pairs = [f"{alias}={name}" for alias, name in ALIASES.items()]
    return "Short aliases: " + ", ".join(pairs)


def create_cli_group():
    """
    Creates and returns the CLI group with all workflow commands.

    Returns:
        click.Group: Configured CLI group
    """

    @click.group(cls=AliasedGroup, epilog=_aliases_epilog())
    @click.option(
        '--repo-dir', '-C',
        type=click.Path(exists=True, file_okay=False),
        default=None,
        help='Run as if started in this directory'
    )
    @click.option(
        '--dry-run',
        is_flag=True,
        default=False,
        help='Print the git commands without running them'
    )
    @click.version_option(__version__, prog_name='git-promote')
    @click.pass_context
    def cli(ctx, repo_dir, dry_run):
        """Git Workflow Tool - Manage your Git branching workflow

        feature/* → Development → Nightly / Release → main, plus hotfix/* from main.
        """
        if ctx.obj is None:
            ctx.obj = build_manager(repo_dir, dry_run)

    for cmd_name, command in ALL_COMMANDS.items():
        cli.add_command(command, cmd_name)

    return cli


def main():
    "Console script entry point."
    create_cli_group()(prog_name='git-promote')

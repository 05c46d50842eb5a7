"""
WorkflowManager module for git-promote

Encodes the branch-promotion workflows of the Development / Nightly /
Release / main branching model as fixed sequences of git commands.

Branch flow:
    feature/<name> → Development → Nightly
                                 → Release → main
    main → hotfix/<name> → main + Development (forward-port)

Every workflow stops at the first failing step and raises a WorkflowError
naming that step. Nothing is rolled back: the repository stays in whatever
state git left it in.
"""

import sys
from contextlib import contextmanager
from datetime import date
from typing import Callable, Optional

from git.exc import GitCommandError

from git_promote.executor import GitCommandExecutor

DEVELOPMENT_BRANCH = "Development"
NIGHTLY_BRANCH = "Nightly"
RELEASE_BRANCH = "Release"
MAIN_BRANCH = "main"

FEATURE_PREFIX = "feature/"
HOTFIX_PREFIX = "hotfix/"
BACKUP_TAG_PREFIX = "backup/development-"


def merge_conflict_instructions(branch: str) -> str:
    "Returns the manual resolution steps for a conflicted merge on branch."
    return (
        "Merge conflict resolution instructions:\n"
        "1. Run `git status` to view conflicting files\n"
        "2. Manually edit files (remove conflict markers)\n"
        "3. Run `git add .` to mark conflicts as resolved\n"
        "4. Run `git commit -m \"fix: Resolve merge conflicts\"`\n"
        f"5. Run `git push origin {branch}`"
    )


class WorkflowManagerError(Exception):
    """Base exception for WorkflowManager operations."""
    pass


class PreconditionError(WorkflowManagerError):
    """Raised when a workflow refuses to start (nothing was changed)."""
    pass


class StepError(WorkflowManagerError):
    """
    Raised when a single git step fails.

    Attributes:
        step: Step name (checkout, pull, fetch, merge, push, tag, ...)
        target: Branch, tag or ref the step was acting on
        cause: The GitCommandError reported by the executor
    """

    def __init__(self, step: str, target: str, cause: GitCommandError):
        self.step = step
        self.target = target
        self.cause = cause
        super().__init__(f"{step} {target} failed: {cause}")


class MergeConflictError(StepError):
    """Raised when a merge fails. Carries manual resolution guidance."""

    def __init__(self, source: str, into: str, cause: GitCommandError):
        self.into = into
        super().__init__('merge', source, cause)

    @property
    def guidance(self) -> str:
        return merge_conflict_instructions(self.into)

    def __str__(self) -> str:
        return f"{super().__str__()}\n\n{self.guidance}"


class WorkflowError(WorkflowManagerError):
    """
    Raised when a workflow aborts on a failing step.

    Attributes:
        label: What the workflow was doing (e.g., "failed to push Nightly")
        cause: The StepError raised by the helper
    """

    def __init__(self, label: str, cause: WorkflowManagerError):
        self.label = label
        self.cause = cause
        super().__init__(f"{label}: {cause}")

    @property
    def is_conflict(self) -> bool:
        return isinstance(self.cause, MergeConflictError)


class WorkflowManager:
    """
    Runs the named branch workflows through a GitCommandExecutor.

    The executor is injected at construction: RealGitExecutor for actual
    repositories, RecordingGitExecutor for tests and dry runs.

    Examples:
        manager = WorkflowManager(RealGitExecutor())
        manager.create_feature_branch("login")
        # git checkout Development
        # git checkout -b feature/login

        manager.development_to_release("v1.4.0")
        # merges Development into Release, tags v1.4.0, pushes tags
    """

    def __init__(self, executor: GitCommandExecutor, remote: str = 'origin',
                 today: Callable[[], date] = date.today):
        """
        Initialize WorkflowManager.

        Args:
            executor: Backend used for every git call
            remote: Remote name used by fetch, pull and push
            today: Date provider for backup tags and release messages
        """
        self._executor = executor
        self._remote = remote
        self._today = today

    @property
    def executor(self) -> GitCommandExecutor:
        return self._executor

    @property
    def remote(self) -> str:
        return self._remote

    # ------------------------------------------------------------------
    # Helper primitives
    # ------------------------------------------------------------------

    def _git(self, step: str, target: str, *args: str) -> None:
        "Runs one executor call, wrapping its failure in a StepError."
        try:
            self._executor.run(*args)
        except GitCommandError as e:
            raise StepError(step, target, e) from e

    @contextmanager
    def _step(self, label: str):
        "Wraps a failing step with the workflow's description of it."
        try:
            yield
        except StepError as e:
            raise WorkflowError(label, e) from e

    def checkout(self, branch: str) -> None:
        "Switches to branch."
        print(f"Switching to branch: {branch}")
        self._git('checkout', branch, 'checkout', branch)

    def create_branch(self, branch: str) -> None:
        "Creates branch from the current position and switches to it."
        self._git('create branch', branch, 'checkout', '-b', branch)

    def pull(self, branch: str) -> None:
        "Fetches and integrates <remote>/<branch> into the current branch."
        print(f"Pulling latest changes for {branch} from {self._remote}/{branch}...")
        self._git('pull', branch, 'pull', self._remote, branch)

    def fetch_all(self) -> None:
        "Fetches all remote branches and tags without integrating them."
        print("Fetching latest changes from all remotes...")
        self._git('fetch', self._remote, 'fetch', self._remote)

    def merge(self, source: str, no_ff: bool = False, message: str = '',
              into: Optional[str] = None) -> None:
        """
        Merges source into the current branch.

        Args:
            source: Branch or ref to merge
            no_ff: Always create a merge commit
            message: Merge commit message, used verbatim when not empty
            into: Name of the current branch, used in conflict guidance

        Raises:
            MergeConflictError: If git refuses or fails the merge
        """
        args = ['merge', source]
        if no_ff:
            args.append('--no-ff')
        if message:
            args.extend(['-m', message])
        print(f"Merging {source} into current branch...")
        try:
            self._executor.run(*args)
        except GitCommandError as e:
            raise MergeConflictError(source, into or 'HEAD', e) from e

    def push(self, branch: str = '', force: bool = False, tags: bool = False) -> None:
        """
        Pushes to the remote.

        Args:
            branch: Branch to publish (ignored when tags is True)
            force: Allow non fast-forward pushes
            tags: Push all local tags instead of branch
        """
        args = ['push', self._remote]
        if force:
            args.append('--force')
        if tags:
            args.append('--tags')
        else:
            args.append(branch)
        print(f"Pushing {branch or 'tags'} to {self._remote}...")
        self._git('push', branch or 'tags', *args)

    def branch_exists(self, branch: str) -> bool:
        "Returns True if branch exists locally."
        try:
            self._executor.run('show-ref', '--verify', '--quiet', f'refs/heads/{branch}')
        except GitCommandError:
            return False
        return True

    # ------------------------------------------------------------------
    # Feature workflows
    # ------------------------------------------------------------------

    def create_feature_branch(self, feature_name: str) -> str:
        """
        Create feature/<feature_name> from Development.

        Returns:
            str: The new branch name
        """
        print("--- F_D: Creating Feature Branch ---")
        with self._step(f"failed to checkout {DEVELOPMENT_BRANCH}"):
            self.checkout(DEVELOPMENT_BRANCH)
        new_branch = f"{FEATURE_PREFIX}{feature_name}"
        print(f"Creating new branch: {new_branch} from {DEVELOPMENT_BRANCH}...")
        with self._step("failed to create new feature branch"):
            self.create_branch(new_branch)
        print("--- F_D: Feature Branch Created Successfully ---")
        return new_branch

    def update_feature_branch(self, feature_branch: str) -> None:
        """
        Merge the remote Development into feature_branch and publish it.

        The merge may fast-forward. On conflict, the feature branch is left
        in git's conflicted state.
        """
        print("--- U_B: Updating Feature Branch ---")
        with self._step(f"failed to checkout feature branch {feature_branch}"):
            self.checkout(feature_branch)
        with self._step(f"failed to fetch {self._remote}"):
            self.fetch_all()
        with self._step("merge conflict detected or merge failed. "
                        "Please resolve manually and re-run if needed"):
            self.merge(f"{self._remote}/development", into=feature_branch)
        with self._step("failed to push updated feature branch"):
            self.push(feature_branch)
        print("--- U_B: Feature Branch Updated Successfully ---")

    def consume_feature(self, feature_branch: str) -> None:
        """
        Merge feature_branch into Development.

        Development is first merged into the feature branch so that
        conflicts are resolved there, then the feature is merged back into
        Development and Development is pushed.
        """
        print("--- C_F: Consuming Feature Branch into Development ---")
        with self._step(f"failed to checkout feature branch {feature_branch}"):
            self.checkout(feature_branch)
        with self._step(f"failed to pull feature branch {feature_branch}"):
            self.pull(feature_branch)

        with self._step(f"failed to checkout {DEVELOPMENT_BRANCH} branch"):
            self.checkout(DEVELOPMENT_BRANCH)
        with self._step(f"failed to pull {DEVELOPMENT_BRANCH} before merging feature"):
            self.pull(DEVELOPMENT_BRANCH)

        with self._step(f"failed to checkout feature branch {feature_branch}"):
            self.checkout(feature_branch)
        with self._step(f"merge conflict detected when merging {DEVELOPMENT_BRANCH} "
                        "into feature. Please resolve manually"):
            self.merge(DEVELOPMENT_BRANCH, into=feature_branch)

        with self._step(f"failed to checkout {DEVELOPMENT_BRANCH} branch for final merge"):
            self.checkout(DEVELOPMENT_BRANCH)
        with self._step(f"merge conflict detected when merging feature into "
                        f"{DEVELOPMENT_BRANCH}. Please resolve manually"):
            self.merge(feature_branch, into=DEVELOPMENT_BRANCH)

        with self._step(f"failed to push updated {DEVELOPMENT_BRANCH} branch"):
            self.push(DEVELOPMENT_BRANCH)
        print("--- C_F: Feature Consumed into Development Successfully ---")

    # ------------------------------------------------------------------
    # Development / Nightly / Release workflows
    # ------------------------------------------------------------------

    def update_development(self) -> None:
        """
        Pull the remote Development into the local one.

        On pull failure the conflict resolution instructions are printed
        before the error is raised.
        """
        print("--- U_D: Updating Development Branch ---")
        with self._step(f"failed to checkout {DEVELOPMENT_BRANCH} branch"):
            self.checkout(DEVELOPMENT_BRANCH)
        try:
            self.pull(DEVELOPMENT_BRANCH)
        except StepError as e:
            print()
            print(merge_conflict_instructions(DEVELOPMENT_BRANCH))
            raise WorkflowError(
                f"failed to pull {self._remote}/{DEVELOPMENT_BRANCH}", e) from e
        print("--- U_D: Development Branch Updated Successfully ---")

    def promote_basic(self) -> None:
        "Promote Development to Nightly, fast-forwarding when possible."
        print("--- F_M_D: Promoting Development to Nightly (Basic) ---")
        with self._step(f"failed to checkout {DEVELOPMENT_BRANCH} branch"):
            self.checkout(DEVELOPMENT_BRANCH)
        with self._step(f"failed to pull {DEVELOPMENT_BRANCH} before promoting"):
            self.pull(DEVELOPMENT_BRANCH)

        with self._step(f"failed to checkout {NIGHTLY_BRANCH} branch"):
            self.checkout(NIGHTLY_BRANCH)
        with self._step(f"failed to pull {NIGHTLY_BRANCH} before merge"):
            self.pull(NIGHTLY_BRANCH)
        with self._step(f"failed to fetch {self._remote}"):
            self.fetch_all()
        with self._step(f"merge conflict detected during {DEVELOPMENT_BRANCH} to "
                        f"{NIGHTLY_BRANCH}. Please resolve manually"):
            self.merge(f"{self._remote}/{DEVELOPMENT_BRANCH}", into=NIGHTLY_BRANCH)
        with self._step(f"failed to push updated {NIGHTLY_BRANCH} branch"):
            self.push(NIGHTLY_BRANCH)
        print("--- F_M_D: Development to Nightly (Basic) Completed Successfully ---")

    def promote_validated(self) -> None:
        """
        Promote Development to Nightly with an explicit merge commit.

        Refuses to start if Development has uncommitted changes: in that case
        only the checkout and the status query are issued.

        Raises:
            PreconditionError: If the working tree is not clean
            WorkflowError: If a step fails
        """
        print("--- Promote: Promoting Development to Nightly with validation ---")
        with self._step(f"failed to checkout {DEVELOPMENT_BRANCH}"):
            self.checkout(DEVELOPMENT_BRANCH)
        try:
            clean = self._executor.is_working_tree_clean()
        except GitCommandError as e:
            raise WorkflowError(
                "failed to check git status", StepError('status', DEVELOPMENT_BRANCH, e)) from e
        if not clean:
            raise PreconditionError(
                f"{DEVELOPMENT_BRANCH} has uncommitted changes.\n"
                "Commit or stash changes before promoting:\n"
                "  git status")

        with self._step(f"failed to fetch {self._remote}"):
            self.fetch_all()
        with self._step(f"failed to pull {self._remote}/{DEVELOPMENT_BRANCH}"):
            self.pull(DEVELOPMENT_BRANCH)

        with self._step(f"failed to checkout {NIGHTLY_BRANCH}"):
            self.checkout(NIGHTLY_BRANCH)
        with self._step(f"merge conflict during {DEVELOPMENT_BRANCH} to "
                        f"{NIGHTLY_BRANCH} promotion"):
            self.merge(f"{self._remote}/{DEVELOPMENT_BRANCH}", no_ff=True, into=NIGHTLY_BRANCH)
        with self._step(f"failed to push {NIGHTLY_BRANCH}"):
            self.push(NIGHTLY_BRANCH)
        print("--- Promote: Development Promoted to Nightly Successfully ---")

    def development_to_release(self, version_tag: Optional[str] = None) -> None:
        """
        Promote Development to Release, optionally tagging the result.

        Release is created from Development when it does not exist locally,
        otherwise it is checked out and pulled. The merge always produces a
        dated merge commit.

        Args:
            version_tag: Annotated tag to create and push (e.g., "v1.4.0")
        """
        print("--- D_R: Promoting Development to Release ---")
        with self._step(f"failed to checkout {DEVELOPMENT_BRANCH}"):
            self.checkout(DEVELOPMENT_BRANCH)
        with self._step(f"failed to pull {DEVELOPMENT_BRANCH}"):
            self.pull(DEVELOPMENT_BRANCH)

        if not self.branch_exists(RELEASE_BRANCH):
            with self._step(f"failed to create {RELEASE_BRANCH} branch"):
                self.create_branch(RELEASE_BRANCH)
        else:
            with self._step(f"failed to checkout {RELEASE_BRANCH} branch"):
                self.checkout(RELEASE_BRANCH)
            with self._step(f"failed to pull {RELEASE_BRANCH} branch"):
                self.pull(RELEASE_BRANCH)

        merge_message = (f"chore: Promote {DEVELOPMENT_BRANCH} to {RELEASE_BRANCH} "
                         f"[{self._today():%Y-%m-%d}]")
        with self._step(f"merge conflict during {DEVELOPMENT_BRANCH} to "
                        f"{RELEASE_BRANCH} promotion"):
            self.merge(DEVELOPMENT_BRANCH, no_ff=True, message=merge_message,
                       into=RELEASE_BRANCH)
        with self._step(f"failed to push {RELEASE_BRANCH} branch"):
            self.push(RELEASE_BRANCH)

        if version_tag:
            print(f"Tagging release as {version_tag}...")
            with self._step("failed to create tag"):
                self._git('tag', version_tag,
                          'tag', '-a', version_tag, '-m', f"Release candidate {version_tag}")
            with self._step("failed to push tag"):
                self.push(tags=True)
        print("--- D_R: Development Promoted to Release Successfully ---")

    def sync_development_with_main(self) -> str:
        """
        Back up Development with a dated tag, then reset it to the remote main.

        DESTRUCTIVE: the remote Development is force-pushed. Its previous
        history is only reachable through the backup tag.

        Returns:
            str: The backup tag name (backup/development-YYYYMMDD)
        """
        print(f"--- M: Backing up {DEVELOPMENT_BRANCH} and resetting to {MAIN_BRANCH} ---")
        with self._step(f"failed to checkout {DEVELOPMENT_BRANCH} for backup"):
            self.checkout(DEVELOPMENT_BRANCH)
        backup_tag = f"{BACKUP_TAG_PREFIX}{self._today():%Y%m%d}"
        with self._step("failed to create development backup tag"):
            self._git('tag', backup_tag, 'tag', backup_tag)
        with self._step("failed to push backup tag"):
            self.push(tags=True)

        with self._step(f"failed to checkout {DEVELOPMENT_BRANCH} for reset"):
            self.checkout(DEVELOPMENT_BRANCH)
        with self._step(f"failed to fetch {self._remote} before resetting {DEVELOPMENT_BRANCH}"):
            self.fetch_all()
        main_ref = f"{self._remote}/{MAIN_BRANCH}"
        print(f"Hard resetting {DEVELOPMENT_BRANCH} to {main_ref}... "
              f"(DANGER: This discards local {DEVELOPMENT_BRANCH} changes)")
        with self._step(f"failed to hard reset {DEVELOPMENT_BRANCH} to {main_ref}"):
            self._git('reset', main_ref, 'reset', '--hard', main_ref)
        print(f"Force pushing {DEVELOPMENT_BRANCH} to remote... "
              f"(DANGER: This overwrites remote {DEVELOPMENT_BRANCH})")
        with self._step(f"failed to force push {DEVELOPMENT_BRANCH}"):
            self.push(DEVELOPMENT_BRANCH, force=True)
        print(f"--- M: Development Backup and Sync with {MAIN_BRANCH} Completed ---")
        return backup_tag

    # ------------------------------------------------------------------
    # Hotfix workflows
    # ------------------------------------------------------------------

    def create_hotfix(self, hotfix_name: str) -> str:
        """
        Create hotfix/<hotfix_name> from the up-to-date main and publish it.

        Returns:
            str: The new branch name
        """
        print("--- C_H: Creating Hotfix Branch ---")
        with self._step(f"failed to checkout {MAIN_BRANCH} branch"):
            self.checkout(MAIN_BRANCH)
        with self._step(f"failed to pull {MAIN_BRANCH} branch"):
            self.pull(MAIN_BRANCH)

        hotfix_branch = f"{HOTFIX_PREFIX}{hotfix_name}"
        print(f"Creating new hotfix branch: {hotfix_branch} from {MAIN_BRANCH}...")
        with self._step("failed to create new hotfix branch"):
            self.create_branch(hotfix_branch)
        with self._step("failed to push hotfix branch to remote"):
            self.push(hotfix_branch)
        print("--- C_H: Hotfix Branch Created and Pushed Successfully ---")
        return hotfix_branch

    def update_main_with_hotfix(self, hotfix_branch: str) -> None:
        """
        Merge hotfix_branch into main, forward-port it to Development, then
        delete it locally and on the remote.

        Deletion is best effort: its failures are printed as warnings and do
        not make the workflow fail.
        """
        print(f"--- U_M: Updating {MAIN_BRANCH} with Hotfix and Forward-Porting ---")
        with self._step(f"failed to checkout {MAIN_BRANCH} branch"):
            self.checkout(MAIN_BRANCH)
        with self._step(f"merge conflict detected during hotfix merge to {MAIN_BRANCH}. "
                        "Please resolve manually"):
            self.merge(hotfix_branch, no_ff=True, into=MAIN_BRANCH)
        with self._step(f"failed to push {MAIN_BRANCH} after hotfix merge"):
            self.push(MAIN_BRANCH)

        with self._step(f"failed to checkout {DEVELOPMENT_BRANCH} for forward-port"):
            self.checkout(DEVELOPMENT_BRANCH)
        forward_port_message = f"chore: Forward-port {hotfix_branch} to {DEVELOPMENT_BRANCH}"
        with self._step(f"merge conflict detected during hotfix forward-port to "
                        f"{DEVELOPMENT_BRANCH}. Please resolve manually"):
            self.merge(hotfix_branch, no_ff=True, message=forward_port_message,
                       into=DEVELOPMENT_BRANCH)
        with self._step(f"failed to push {DEVELOPMENT_BRANCH} after forward-port"):
            self.push(DEVELOPMENT_BRANCH)

        print(f"Cleaning up hotfix branch: {hotfix_branch}...")
        try:
            self._git('delete branch', hotfix_branch, 'branch', '-d', hotfix_branch)
        except StepError as e:
            print(f"Warning: Failed to delete local hotfix branch {hotfix_branch}: {e.cause}",
                  file=sys.stderr)
        try:
            self._git('delete remote branch', hotfix_branch,
                      'push', self._remote, '--delete', hotfix_branch)
        except StepError as e:
            print(f"Warning: Failed to delete remote hotfix branch {hotfix_branch}: {e.cause}",
                  file=sys.stderr)
        print(f"--- U_M: {MAIN_BRANCH} Updated and Hotfix Forward-Ported Successfully ---")

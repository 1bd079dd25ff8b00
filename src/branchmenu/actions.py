"""Branch actions offered after a branch has been selected."""

import subprocess
from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional

from git import Git, GitCommandNotFound
from rich.console import Console

from branchmenu.git import Branch, GitError, GitRepo


class UnknownActionError(KeyError):
    """No action is registered under the given id."""


class ActionDisabledError(Exception):
    """The action cannot run on the selected branch."""


@dataclass(frozen=True)
class Action:
    """A fixed branch action and the git command behind it."""

    id: str
    label: str
    git_args: Optional[tuple[str, ...]] = None
    forbidden_on_current: bool = False
    disabled_reason: str = ""
    interactive: bool = False
    in_menu: bool = True

    def command(self, branch_name: str) -> list[str]:
        """Build the git argument vector for a branch."""
        if self.git_args is None:
            return []
        return ["git", *self.git_args, branch_name]

    def is_disabled_for(self, branch: Branch) -> bool:
        return self.forbidden_on_current and branch.is_current

    def execute(self, repo: GitRepo, branch: Branch, console: Optional[Console] = None) -> bool:
        """Run the action on a branch.

        Returns:
            bool: False if git reported an error, True otherwise

        Raises:
            ActionDisabledError: If the action is not allowed on the current branch
            GitError: If git cannot be started at all
        """
        console = console or Console()
        if self.is_disabled_for(branch):
            raise ActionDisabledError(f"{self.disabled_reason} {branch.name}")

        argv = self.command(branch.name)
        if not argv:
            return True

        console.print(" ".join(argv), style="dim", markup=False, highlight=False)
        argv = [Git.GIT_PYTHON_GIT_EXECUTABLE or "git", *argv[1:]]
        if self.interactive:
            return self._run_attached(repo, argv, console)

        try:
            status, stdout, stderr = repo.repo.git.execute(
                argv, with_extended_output=True, with_exceptions=False
            )
        except GitCommandNotFound as err:
            raise GitError(f"Failed to run {argv[0]}: {err}") from err
        if status != 0:
            console.print(stderr.strip(), style="yellow", markup=False, highlight=False)
            return False
        for text in (stdout, stderr):
            if text.strip():
                console.print(text.strip(), markup=False, highlight=False)
        return True

    def _run_attached(self, repo: GitRepo, argv: list[str], console: Console) -> bool:
        """Run git with the terminal attached so an editor can take over."""
        try:
            result = subprocess.run(argv, cwd=repo.working_dir, check=False)
        except OSError as err:
            raise GitError(f"Failed to run {argv[0]}: {err}") from err
        if result.returncode != 0:
            console.print(f"git exited with status {result.returncode}", style="yellow")
            return False
        return True


ACTIONS = MappingProxyType(
    {
        action.id: action
        for action in (
            Action(
                id="checkout",
                label="Checkout branch",
                git_args=("checkout",),
                forbidden_on_current=True,
                disabled_reason="Already on",
            ),
            Action(
                id="edit",
                label="Edit description",
                git_args=("branch", "--edit-description"),
                interactive=True,
            ),
            Action(
                id="delete",
                label="Delete branch",
                git_args=("branch", "-d"),
                forbidden_on_current=True,
                disabled_reason="Cannot delete",
            ),
            Action(id="show", label="Show branch", in_menu=False),
        )
    }
)


def resolve_action(action_id: str) -> Action:
    """Look up a registered action by id."""
    try:
        return ACTIONS[action_id]
    except KeyError:
        raise UnknownActionError(action_id) from None


def menu_actions() -> list[Action]:
    """Actions offered in the action menu, in registry order."""
    return [action for action in ACTIONS.values() if action.in_menu]

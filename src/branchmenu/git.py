"""Git repository operations."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo

CURRENT_MARKER = "*"
WORKTREE_MARKER = "+"


class GitError(Exception):
    """Git operation error."""


@dataclass(frozen=True)
class Branch:
    """A local branch as listed by `git branch`."""

    name: str
    is_current: bool = False


@dataclass(frozen=True)
class BranchListing:
    """Local branches in the order git prints them, plus the current one."""

    branches: list[Branch]
    current: Branch

    @property
    def names(self) -> list[str]:
        return [branch.name for branch in self.branches]


def parse_branch_listing(output: str) -> BranchListing:
    """Parse the plain output of `git branch`.

    Each line carries a two character marker column: ``*`` for the current
    branch, ``+`` for a branch checked out in another worktree, blank otherwise.

    Raises:
        GitError: If there is not exactly one current branch, or HEAD is detached
    """
    branches = []
    for line in output.splitlines():
        if not line.strip():
            continue
        marker, name = line[:2].strip(), line[2:].strip()
        if marker not in ("", CURRENT_MARKER, WORKTREE_MARKER):
            raise GitError(f"Unexpected branch listing line: {line!r}")
        is_current = marker == CURRENT_MARKER
        if is_current and name.startswith("("):
            raise GitError(f"No current branch: {name}")
        branches.append(Branch(name=name, is_current=is_current))

    current = [branch for branch in branches if branch.is_current]
    if len(current) != 1:
        raise GitError(f"Expected exactly one current branch, found {len(current)}")
    return BranchListing(branches=branches, current=current[0])


class GitRepo:
    """Git repository operations."""

    def __init__(self, path: Path) -> None:
        """Initialize repository."""
        try:
            self.repo: Repo = Repo(path)
            if self.repo.bare:
                raise GitError("Cannot operate on bare repository")
        except (GitCommandError, ValueError, InvalidGitRepositoryError, NoSuchPathError) as err:
            raise GitError(f"Failed to open repository: {err}") from err

    @property
    def working_dir(self) -> Path:
        return Path(self.repo.working_tree_dir)

    def list_branches(self) -> BranchListing:
        """List local branches and find the current one."""
        try:
            status, stdout, stderr = self.repo.git.branch("--no-color", "--no-column", with_extended_output=True)
        except GitCommandError as err:
            raise GitError(f"Failed to list branches: {err}") from err
        if status != 0 or stderr:
            raise GitError(f"Failed to list branches: {stderr.strip()}")
        return parse_branch_listing(stdout)

    def get_branch_description(self, branch_name: str) -> str:
        """Get the description of a branch, or an empty string if none is set."""
        try:
            return self.repo.git.config(f"branch.{branch_name}.description").strip()
        except GitCommandError:
            # git config exits 1 when the key is unset
            return ""

    def get_branch_descriptions(self, branch_names: list[str]) -> dict[str, str]:
        """Fetch descriptions for all branches concurrently.

        Returns:
            dict: Branch name to description, in the order of ``branch_names``
        """
        if not branch_names:
            return {}
        with ThreadPoolExecutor(max_workers=min(8, len(branch_names))) as executor:
            descriptions = executor.map(self.get_branch_description, branch_names)
            return dict(zip(branch_names, descriptions))

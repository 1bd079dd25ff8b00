"""Command line interface for branchmenu."""

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich import print
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from branchmenu.actions import Action, ActionDisabledError, UnknownActionError, menu_actions, resolve_action
from branchmenu.git import Branch, BranchListing, GitError, GitRepo
from branchmenu.menu import Choice, select_one

app = typer.Typer(help="Pick a git branch, then checkout, edit, delete or show it")
console = Console()


def get_repo(path: Path) -> GitRepo:
    """Get git repository instance."""
    try:
        return GitRepo(path)
    except GitError as err:
        print(f"[red]Error:[/red] {escape(str(err))}")
        raise typer.Exit(code=1) from err


def preselected_action_id(checkout: bool, edit: bool, delete: bool, show: bool) -> Optional[str]:
    """Only one action can be given on the command line, the first one set wins."""
    for action_id, selected in (("checkout", checkout), ("edit", edit), ("delete", delete), ("show", show)):
        if selected:
            return action_id
    return None


def branch_label(branch: Branch, description: str) -> str:
    """Menu label: current marker, name and the first line of the description."""
    label = ("* " if branch.is_current else "  ") + branch.name
    if description:
        label += f" : {description.splitlines()[0]}"
    return label


def build_branch_choices(
    listing: BranchListing,
    descriptions: dict[str, str],
    action: Optional[Action] = None,
) -> list[Choice[Branch]]:
    choices = []
    for branch in listing.branches:
        disabled = None
        if action is not None and action.is_disabled_for(branch):
            disabled = f"{action.id} cannot be executed"
        choices.append(Choice(branch_label(branch, descriptions.get(branch.name, "")), branch, disabled))
    return choices


def build_action_choices(branch: Branch) -> list[Choice[Action]]:
    return [
        Choice(action.label, action, action.disabled_reason if action.is_disabled_for(branch) else None)
        for action in menu_actions()
    ]


def show_branch(branch: Branch, description: str) -> None:
    """Print a branch and its full description."""
    title = f"{escape(branch.name)} [turquoise2](current)[/turquoise2]" if branch.is_current else escape(branch.name)
    body = escape(description) if description else "[dim]No description[/dim]"
    console.print(Panel(body, title=title, title_align="left", padding=(0, 2), expand=False))


@app.command()
def main(
    current: Annotated[bool, typer.Option("--current", help="Select the current branch without a menu")] = False,
    checkout: Annotated[bool, typer.Option("--checkout", help="Checkout the selected branch")] = False,
    edit: Annotated[bool, typer.Option("--edit", help="Edit the description of the selected branch")] = False,
    delete: Annotated[bool, typer.Option("--delete", help="Delete the selected branch")] = False,
    show: Annotated[bool, typer.Option("--show", help="Show the selected branch only")] = False,
    path: Annotated[Path, typer.Option(help="Path to git repository", envvar="BRANCHMENU_PATH")] = Path("."),
    strict: Annotated[bool, typer.Option("--strict", help="Exit non-zero when the action fails")] = False,
) -> None:
    """Select a branch, then an action to run on it."""
    repo = get_repo(path)
    try:
        listing = repo.list_branches()
    except GitError as err:
        print(f"[red]Error:[/red] {escape(str(err))}")
        raise typer.Exit(code=1) from err

    action_id = preselected_action_id(checkout, edit, delete, show)
    try:
        action = resolve_action(action_id) if action_id else None
    except UnknownActionError as err:
        print(f"[red]Error:[/red] Unknown action {escape(str(err))}")
        raise typer.Exit(code=1) from err
    show_only = action is not None and action.id == "show"

    # Select the branch
    if current:
        branch = listing.current
        descriptions = repo.get_branch_descriptions([branch.name]) if show_only else {}
    else:
        descriptions = repo.get_branch_descriptions(listing.names)
        branch = select_one(
            "Select branch",
            build_branch_choices(listing, descriptions, action),
            console=console,
        )
        if branch is None:
            return

    if show_only:
        show_branch(branch, descriptions.get(branch.name, ""))
        return

    # Select the action
    if action is None:
        action = select_one("Select command", build_action_choices(branch), console=console)
        if action is None:
            return

    try:
        succeeded = action.execute(repo, branch, console=console)
    except ActionDisabledError as err:
        print(f"[yellow]{escape(str(err))}[/yellow]")
        succeeded = False
    except GitError as err:
        print(f"[red]Error:[/red] {escape(str(err))}")
        raise typer.Exit(code=1) from err

    if strict and not succeeded:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()

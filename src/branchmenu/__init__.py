"""Interactive git branch menu.

Features:
- List local branches with their descriptions
- Checkout, edit the description of, or delete a selected branch
- Skip the menus with --current and an action flag
- Show a single branch with --show
"""

__version__ = "0.1.0"

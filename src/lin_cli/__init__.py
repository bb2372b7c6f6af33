"""
lin — a terminal dashboard for the Linear issues assigned to you.

Browse your queue, read issue descriptions rendered as Markdown, open an
issue or its pull requests in the browser, and check out the issue's
branch without leaving the terminal.

Package layout (src/lin_cli/):
  core/    — config, constants, exceptions, logging, keyring storage
  linear/  — issue models, GraphQL client, local issue cache
  git/     — branch checkout
  tui/     — dashboard state machine and the Textual shell around it
  cli/     — Click CLI entry point
"""

__version__ = "0.3.0"
__all__ = ["__version__"]

"""CLI UI components (Rich).

Why separate components:
- Keeps command logic free of rendering details.
- Step messages and errors look the same for every command.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from core.domain.errors import DbOpsError
from core.services.orchestrator import OrchestratorHooks

_STEP_ICONS = {
    "Pinging": "🔌",
    "Recreating": "♻️ ",
    "Seeding database": "🌱",
}


def _icon_for(message: str) -> str:
    for prefix, icon in _STEP_ICONS.items():
        if message.startswith(prefix):
            return icon
    return "•"


def print_step_started(console: Console, message: str) -> None:
    console.print(Text(f"{_icon_for(message)} {message}", style="cyan"))


def print_step_completed(console: Console, message: str) -> None:
    console.print(Text(f"✅ {message}", style="bold green"))


def print_error(console: Console, error: DbOpsError) -> None:
    """Print a failure as a single human readable line."""

    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")


def build_console_hooks(console: Console) -> OrchestratorHooks:
    """Hooks that render orchestrator progress on `console`."""

    return OrchestratorHooks(
        step_started=lambda message: print_step_started(console, message),
        step_completed=lambda message: print_step_completed(console, message),
    )

"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import PagedResult, UserRecord
from core.errors import ApiClientError, MissingTokenError, TransportError


def _display(value: object) -> str:
    return "-" if value is None or value == "" else str(value)


def build_users_table(result: PagedResult[UserRecord]) -> Table:
    """Tabla de usuarios en el orden que devolvió el servidor."""

    table = Table(
        title="Users",
        caption=(
            f"Page {result.current_page}/{result.total_pages} "
            f"· {result.page_size} per page · {result.total_records} total"
        ),
    )
    table.add_column("ID", style="cyan", no_wrap=True, justify="right")
    table.add_column("Email", style="white")
    table.add_column("Name", style="green")
    table.add_column("Role", style="magenta")
    table.add_column("Created", style="dim")

    for user in result.data:
        full_name = " ".join(part for part in (user.name, user.lastname) if part)
        table.add_row(
            str(user.id),
            user.email,
            _display(full_name),
            _display(user.role),
            _display(user.created_at),
        )
    return table


def build_user_panel(user: UserRecord) -> Panel:
    """Panel con el detalle completo (incluye campos no modelados)."""

    body = Text()
    for key, value in user.model_dump(exclude_none=False).items():
        body.append(f"{key}: ", style="bold")
        body.append(f"{_display(value)}\n")
    return Panel(body, title=Text(f"User #{user.id}", style="bold cyan"), border_style="cyan")


def build_error_panel(error: ApiClientError) -> Panel:
    title = type(error).__name__
    if error.http_status is not None:
        title = f"{title} · HTTP {error.http_status}"

    body = Text(error.message)
    if isinstance(error, TransportError) and error.is_unauthenticated:
        body.append("\n\nYour session is invalid or expired. Run `dojo-admin login` again.", style="dim")
    elif isinstance(error, TransportError) and error.is_forbidden:
        body.append("\n\nYour account lacks the role required for this action.", style="dim")
    elif isinstance(error, MissingTokenError):
        body.append("\n\nLog in first with `dojo-admin login`.", style="dim")

    return Panel(body, title=Text(title, style="bold red"), border_style="red")

"""CLI `dojo-admin`: administración de la federación contra el backend REST.

La CLI es el llamador del cliente de la API: decide dónde guardar el token,
cómo mostrar errores y cuándo invalidar la sesión (HTTP 401).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Coroutine, TypeVar

import typer
from pydantic import BaseModel, ValidationError
from rich.console import Console

from cli import doctor
from cli.state import CliState, build_state
from cli.token_store import StoredSession
from cli.ui_components import build_error_panel, build_user_panel, build_users_table
from core.domain.models import Credentials, RegistrationRequest, Role
from core.errors import ApiClientError, RequestCancelledError, TransportError
from core.logging_setup import configure_logging

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

# Reglas de formulario (alta pública vs. alta por admin).
REGISTER_PASSWORD_MIN_LENGTH = 6
ADMIN_CREATE_PASSWORD_MIN_LENGTH = 8

app = typer.Typer(no_args_is_help=True, help="Martial-arts federation admin client.")
users_app = typer.Typer(no_args_is_help=True, help="Browse federation users (requires login).")
app.add_typer(users_app, name="users")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    if ctx.obj is None:
        ctx.obj = build_state()
    state: CliState = ctx.obj
    configure_logging("DEBUG" if verbose else state.settings.log_level)


def _state(ctx: typer.Context) -> CliState:
    return ctx.find_root().obj


def _call(state: CliState, coro: Coroutine[Any, Any, T]) -> T:
    """Ejecuta una operación del cliente y traduce `ApiClientError` a salida de la CLI."""

    try:
        return asyncio.run(coro)
    except RequestCancelledError:
        raise
    except ApiClientError as exc:
        if isinstance(exc, TransportError) and exc.is_unauthenticated and state.store.clear():
            logger.info("Stored session cleared after HTTP 401")
        _err_console.print(build_error_panel(exc))
        raise typer.Exit(code=1) from exc


def _validated(model: type[M], **data: Any) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise typer.BadParameter(details) from exc


def _check_password(password: str, min_length: int) -> None:
    if len(password) < min_length:
        raise typer.BadParameter(f"Password must be at least {min_length} characters long.")


def _parse_role(value: str) -> Role:
    if value.isdigit():
        try:
            return Role(int(value))
        except ValueError:
            pass
    try:
        return Role.from_name(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _token(state: CliState) -> str:
    session = state.store.load()
    return session.access_token if session else ""


@app.command()
def login(
    ctx: typer.Context,
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Account email."),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True, help="Account password."),
    show_token: bool = typer.Option(False, "--show-token", help="Print the access token after logging in."),
) -> None:
    """Log in and keep the session token for later commands."""

    state = _state(ctx)
    credentials = _validated(Credentials, email=email, password=password)
    token = _call(state, state.api.login(credentials))

    path = state.store.save(StoredSession(access_token=token.access_token, email=credentials.email))
    _console.print(f"[green]Logged in as[/green] {credentials.email}")
    _console.print(f"[dim]Session stored in {path}[/dim]")
    if show_token:
        _console.print(token.access_token, markup=False, highlight=False)


@app.command()
def logout(ctx: typer.Context) -> None:
    """Forget the stored session token."""

    state = _state(ctx)
    if state.store.clear():
        _console.print("[green]Logged out.[/green]")
    else:
        _console.print("[yellow]No active session.[/yellow]")


@app.command()
def register(
    ctx: typer.Context,
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Email for the new account."),
    password: str = typer.Option(
        ...,
        "--password",
        "-p",
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
        help=f"Password (min {REGISTER_PASSWORD_MIN_LENGTH} characters).",
    ),
    role: str = typer.Option("admin", "--role", "-r", help="Role name or id assigned to the account."),
) -> None:
    """Create an account through the public sign-up endpoint."""

    state = _state(ctx)
    _check_password(password, REGISTER_PASSWORD_MIN_LENGTH)
    request = _validated(RegistrationRequest, email=email, password=password, role_id=int(_parse_role(role)))

    message = _call(state, state.api.register(request))
    _console.print(f"[green]{message}[/green] You can now run `dojo-admin login`.")


@app.command(name="create-user")
def create_user(
    ctx: typer.Context,
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Email for the new user."),
    password: str = typer.Option(
        ...,
        "--password",
        "-p",
        prompt=True,
        hide_input=True,
        help=f"Password (min {ADMIN_CREATE_PASSWORD_MIN_LENGTH} characters).",
    ),
    role: str = typer.Option(
        ...,
        "--role",
        "-r",
        prompt="Role (admin, master, representative, student)",
        help="Role name or id for the new user.",
    ),
) -> None:
    """Create a user as an administrator (requires an admin session)."""

    state = _state(ctx)
    _check_password(password, ADMIN_CREATE_PASSWORD_MIN_LENGTH)
    request = _validated(RegistrationRequest, email=email, password=password, role_id=int(_parse_role(role)))

    response = _call(state, state.api.create_user_as_admin(request, _token(state)))
    description = response.description or f"User {request.email} was created."
    _console.print(f"[green]User created.[/green] {description}")


@users_app.command(name="list")
def list_users(
    ctx: typer.Context,
    page: int = typer.Option(1, "--page", min=1, help="Page number (1-based)."),
    limit: int = typer.Option(10, "--limit", "-l", min=1, help="Users per page."),
) -> None:
    """List users page by page, in the order the server returns them."""

    state = _state(ctx)
    result = _call(state, state.api.list_users_paged(_token(state), page, limit))
    _console.print(build_users_table(result))
    if result.has_next:
        _console.print(f"[dim]Next: dojo-admin users list --page {result.current_page + 1} --limit {limit}[/dim]")


@users_app.command(name="show")
def show_user(
    ctx: typer.Context,
    user_id: int = typer.Argument(..., help="Numeric user id."),
) -> None:
    """Show every field the server returns for one user."""

    state = _state(ctx)
    user = _call(state, state.api.get_user_detail(_token(state), user_id))
    _console.print(build_user_panel(user))


def run() -> None:
    app(prog_name="dojo-admin")

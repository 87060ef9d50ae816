"""Provider factory functions for CLI.

Centralizes creation of the gateway, business data and user from settings.
Hides configuration details from command implementations.
"""

import typer
from rich.console import Console

from ..business import BusinessDataService, create_business_data
from ..config import Settings
from ..gateway import ModelGateway, create_gateway
from ..identity import User, UserDirectory

# Default console for output
_console = Console()


def get_gateway(settings: Settings, console: Console | None = None) -> ModelGateway:
    """Create the Gemini gateway from settings.

    Raises:
        typer.Exit: If GEMINI_API_KEY is not set
    """
    con = console or _console
    if not settings.api_key:
        con.print("[red]Error: GEMINI_API_KEY not set in environment[/red]")
        raise typer.Exit(code=1)
    return create_gateway("gemini", api_key=settings.api_key, model=settings.model)


def get_business_data() -> BusinessDataService:
    """Create the demo business data backend."""
    return create_business_data("memory")


def require_user(email: str, console: Console | None = None) -> User:
    """Log in a demo user by email.

    Raises:
        typer.Exit: If no demo user has that email
    """
    con = console or _console
    user = UserDirectory().login(email)
    if user is None:
        con.print(f"[red]Error: no user with email {email}[/red]")
        con.print("[dim]Run 'serviceai users' to see the demo accounts.[/dim]")
        raise typer.Exit(code=1)
    return user

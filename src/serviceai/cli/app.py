"""Main CLI application using Typer."""
import asyncio

import typer
from rich.console import Console
from rich.table import Table

from ..config import SUPPORT_PHONE_NUMBER, Settings
from ..conversations import ConversationStore, Message, Sender, render_message
from ..errors import ServiceAIError
from ..identity import UserDirectory
from ..logging_config import setup_logging
from ..session import ConversationSessionManager, EventKind
from ..tools import ToolDispatcher
from .providers import get_business_data, get_gateway, require_user

# Create Typer app
app = typer.Typer(
    name="serviceai",
    help="Service.AI customer support chat client",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

HELP_TEXT = """[dim]Commands:
  /new              start a new conversation
  /list [query]     list conversations (pinned first)
  /switch N         switch to conversation N from the last /list
  /pin              pin or unpin this conversation
  /delete           delete this conversation
  /feedback         leave feedback
  /rename NAME      rename this conversation
  /quit             leave[/dim]"""


def print_message(message: Message) -> None:
    """Print a chat message with the contact affordance when present."""
    shown = render_message(message)
    if shown.sender == Sender.USER:
        console.print(f"[dim]{shown.time_label}[/dim] [bold yellow]You:[/bold yellow] {shown.text}")
        return
    console.print(f"[dim]{shown.time_label}[/dim] [bold green]Service.AI:[/bold green] {shown.text}")
    if shown.show_contact_info:
        console.print(f"[cyan]Contact our support team: {SUPPORT_PHONE_NUMBER}[/cyan]")


def print_conversations(store: ConversationStore, query: str | None = None) -> list[str]:
    """Print the conversation list and return ids in display order."""
    conversations = store.list_conversations(query)
    table = Table(show_header=True, box=None)
    table.add_column("#", style="bold cyan")
    table.add_column("Name")
    table.add_column("Messages", justify="right")
    table.add_column("Flags")
    for i, conversation in enumerate(conversations, 1):
        flags = []
        if conversation.id == store.active_id:
            flags.append("active")
        if conversation.is_pinned:
            flags.append("pinned")
        if conversation.is_unread:
            flags.append("unread")
        table.add_row(str(i), conversation.name, str(len(conversation.messages)), ", ".join(flags))
    console.print(table)
    return [c.id for c in conversations]


@app.command()
def users():
    """List the demo accounts you can chat as."""
    table = Table(show_header=True)
    table.add_column("ID", style="bold cyan")
    table.add_column("Name")
    table.add_column("Email")
    for user in UserDirectory().users:
        table.add_row(str(user.id), user.full_name, user.email)
    console.print(table)


@app.command()
def chat(
    email: str = typer.Option(
        ...,
        "--email",
        "-e",
        help="Email of the demo user to log in as"
    ),
    log_level: str = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level (default: SERVICEAI_LOG_LEVEL or WARNING)"
    )
):
    """Interactive support chat."""
    settings = Settings.from_env()
    setup_logging(log_level or settings.log_level)
    user = require_user(email, console)

    async def _chat():
        gateway = get_gateway(settings, console)
        store = ConversationStore()
        manager = ConversationSessionManager(
            store=store,
            gateway=gateway,
            dispatcher=ToolDispatcher(get_business_data()),
            user=user,
            settings=settings,
        )
        listed: list[str] = []

        try:
            conversation = manager.new_conversation()
            console.print("[bold cyan]Service.AI[/bold cyan]")
            console.print(HELP_TEXT + "\n")
            print_message(conversation.last_message)

            while True:
                try:
                    user_input = await asyncio.to_thread(console.input, "[bold yellow]You:[/bold yellow] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                text = user_input.strip()
                if not text:
                    continue

                active_id = store.active_id
                command, _, argument = text.partition(" ")
                command = command.lower()

                if command in ("/quit", "/exit"):
                    console.print("[dim]Goodbye![/dim]")
                    break
                if command == "/new":
                    print_message(manager.new_conversation().last_message)
                    continue
                if command == "/list":
                    listed = print_conversations(store, argument or None)
                    continue
                if command == "/switch":
                    if not argument.isdigit() or not 1 <= int(argument) <= len(listed):
                        console.print("[yellow]Run /list, then /switch N[/yellow]")
                        continue
                    selected = store.select_conversation(listed[int(argument) - 1])
                    console.print(f"[dim]Switched to {selected.name}[/dim]")
                    for message in selected.messages:
                        print_message(message)
                    continue
                if active_id is None:
                    print_message(manager.new_conversation().last_message)
                    active_id = store.active_id
                if command == "/pin":
                    pinned = store.toggle_pin(active_id)
                    console.print(f"[dim]{'Pinned' if pinned.is_pinned else 'Unpinned'} {pinned.name}[/dim]")
                    continue
                if command == "/delete":
                    if typer.confirm("Delete this conversation? This cannot be undone."):
                        await manager.delete_conversation(active_id)
                        console.print("[dim]Conversation deleted.[/dim]")
                    continue
                if command == "/feedback":
                    print_message(store.start_feedback(active_id).last_message)
                    continue

                with console.status("[dim]Service.AI is thinking...[/dim]"):
                    event = await manager.send_user_message(active_id, text)
                print_message(event.message)
                if event.renamed_to and event.kind == EventKind.REPLY:
                    console.print(f"[dim]Conversation titled: {event.renamed_to}[/dim]")

        except ServiceAIError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await gateway.close()

    asyncio.run(_chat())


@app.command()
def health():
    """Check configuration needed to reach the model."""
    settings = Settings.from_env()
    if settings.api_key:
        console.print("[green]+[/green] Gemini API key: SET")
    else:
        console.print("[red]x[/red] Gemini API key: NOT SET")
        raise typer.Exit(code=1)
    console.print(f"[green]+[/green] Text model: {settings.model}")
    console.print(f"[green]+[/green] Live model: {settings.live_model} (voice {settings.voice_name})")
    console.print(f"[green]+[/green] Tool round limit: {settings.max_tool_rounds}")


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

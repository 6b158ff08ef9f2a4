"""Resource commands.

The CLI is stateless between invocations: every command prints the ticket
the server returned, and later commands accept it back through --ticket.
"""

import json

import click
from rich.console import Console
from rich.markup import escape

from ..client import (
    Data,
    Failure,
    Pending,
    Resource,
    ResourceError,
    ResourceFactory,
    acquire_lock,
)

console = Console()


def _factory() -> ResourceFactory:
    try:
        return ResourceFactory()
    except ValueError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise click.Abort()


def _print_ticket(resource: Resource) -> None:
    ticket = resource.current_ticket()
    if ticket is not None:
        console.print(f"[dim]Ticket: {ticket}[/dim]")


def _fail(error: ResourceError) -> None:
    console.print(f"[red]{error.kind.value}:[/red] {escape(str(error))}")
    if error.body:
        console.print(f"[dim]{escape(error.body)}[/dim]")
    raise click.Abort()


@click.command()
@click.argument("name")
@click.option("--timeout", "-t", default=60, show_default=True, help="Lock timeout in seconds")
def create(name: str, timeout: int):
    """Create a resource on the server."""
    with _factory() as factory:
        try:
            factory.create_resource(name, timeout)
        except ResourceError as e:
            _fail(e)
        console.print(f"[green]Created resource {name}[/green]")


@click.command()
@click.argument("name")
@click.argument("selector")
@click.option("--lock", is_flag=True, help="Request the lock while reading")
@click.option("--ticket", help="Ticket returned by a previous command")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def read(name: str, selector: str, lock: bool, ticket: str | None, as_json: bool):
    """Read selector content."""
    with _factory() as factory:
        resource = factory.get_resource(name, ticket=ticket)
        outcome = resource.read(selector, lock=lock)

        if isinstance(outcome, Failure):
            _print_ticket(resource)
            _fail(outcome.to_error())

        if isinstance(outcome, Pending):
            console.print("[yellow]Lock pending, retry with the ticket below.[/yellow]")
        elif isinstance(outcome, Data):
            if as_json:
                console.print_json(json.dumps(outcome.value))
            else:
                console.print(outcome.value)
        _print_ticket(resource)


@click.command()
@click.argument("name")
@click.argument("selector")
@click.option("--ticket", help="Ticket returned by a previous command")
@click.option("--attempts", "-a", default=10, show_default=True, help="Maximum lock probes")
@click.option("--wait", "-w", default=0.5, show_default=True, help="Seconds between probes")
def lock(name: str, selector: str, ticket: str | None, attempts: int, wait: float):
    """Acquire the lock on a selector."""
    with _factory() as factory:
        resource = factory.get_resource(name, ticket=ticket)
        try:
            acquired = acquire_lock(resource, selector, attempts=attempts, wait=wait)
        except ResourceError as e:
            _print_ticket(resource)
            _fail(e)

        if acquired:
            console.print(f"[green]Locked {name}/{selector}[/green]")
        else:
            console.print(f"[yellow]Lock on {name}/{selector} still pending after {attempts} attempts[/yellow]")
        _print_ticket(resource)
        if not acquired:
            raise SystemExit(2)


@click.command()
@click.argument("name")
@click.argument("selector")
@click.argument("payload")
@click.option("--ticket", required=True, help="Ticket of a granted lock")
def write(name: str, selector: str, payload: str, ticket: str):
    """Write JSON PAYLOAD to a locked selector."""
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid payload JSON: {e}[/red]")
        raise click.Abort()

    with _factory() as factory:
        resource = factory.get_resource(name, ticket=ticket)
        outcome = resource.write(selector, data)
        if isinstance(outcome, Failure):
            _print_ticket(resource)
            _fail(outcome.to_error())
        console.print(f"[green]Updated {name}/{selector}[/green]")
        _print_ticket(resource)


@click.command()
@click.argument("name")
@click.argument("selector")
@click.option("--ticket", required=True, help="Ticket of a granted lock")
def unlock(name: str, selector: str, ticket: str):
    """Release the lock on a selector."""
    with _factory() as factory:
        resource = factory.get_resource(name, ticket=ticket)
        outcome = resource.unlock(selector)
        if isinstance(outcome, Failure):
            _print_ticket(resource)
            _fail(outcome.to_error())
        console.print(f"[green]Unlocked {name}/{selector}[/green]")
        _print_ticket(resource)

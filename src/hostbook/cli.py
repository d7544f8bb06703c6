"""hostbook CLI."""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from hostbook import editor
from hostbook.config import HostbookConfig, default_config_path, get_config_template, load_config
from hostbook.errors import HostbookError, InvalidMacError
from hostbook.resolve import resolve_host
from hostbook.sshconfig.lines import is_valid_mac
from hostbook.sshconfig.parser import parse_config, parse_config_with_warnings
from hostbook.store.file import FileConfigStore
from hostbook.types import DEFAULT_ICON, Host

app = typer.Typer(help="hostbook - grouped SSH hosts in your ~/.ssh/config")
console = Console()

CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Path to hostbook.yaml")
FILE_OPTION = typer.Option(None, "--file", "-f", help="SSH config file (overrides hostbook.yaml)")
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable verbose logging")


def setup_logging(verbose: bool = False):
    """Configure logging with rich handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )
    logging.getLogger("paramiko").setLevel(logging.WARNING)


def fail(message: str) -> typer.Exit:
    console.print(f"[red]Error:[/red] {escape(message)}")
    return typer.Exit(1)


def get_settings(config_path: Path | None) -> HostbookConfig:
    """Load hostbook.yaml, exiting on invalid settings."""
    path = config_path or default_config_path()
    try:
        return load_config(path)
    except ValueError as e:
        raise fail(f"Invalid settings in {path}: {e}")


def get_store(config_path: Path | None, ssh_file: Path | None) -> FileConfigStore:
    """Get the SSH config store from settings or an explicit file."""
    settings = get_settings(config_path)
    path = ssh_file or settings.ssh_config.resolved_path()
    return FileConfigStore(path, backup=settings.ssh_config.backup)


@app.command()
def init(config_path: Path | None = CONFIG_OPTION):
    """Write a default hostbook.yaml."""
    path = config_path or default_config_path()

    if path.exists():
        console.print(f"[yellow]Warning:[/yellow] {path} already exists.")
        if not typer.confirm("Overwrite?"):
            raise typer.Exit(0)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(get_config_template())
    console.print("[green]Initialized hostbook.[/green]")
    console.print(f"  Config: {path}")


@app.command("list")
def list_hosts(
    group: str | None = typer.Option(None, "--group", "-g", help="Only show this group"),
    config_path: Path | None = CONFIG_OPTION,
    ssh_file: Path | None = FILE_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """List managed hosts by group."""
    setup_logging(verbose)
    settings = get_settings(config_path)
    store = get_store(config_path, ssh_file)

    try:
        document = store.load()
    except HostbookError as e:
        raise fail(str(e))

    groups = [g for g in document.groups if group is None or g.name == group]
    if not groups:
        console.print("No hosts.")
        return

    table = Table()
    table.add_column("Group")
    table.add_column("Host")
    table.add_column("HostName")
    table.add_column("User")
    table.add_column("Port")
    table.add_column("Icon")
    table.add_column("MAC")
    if settings.display.show_commands:
        table.add_column("Commands")
    if settings.display.show_options:
        table.add_column("Options")

    for g in groups:
        for host in g.hosts:
            row = [
                g.name or "-",
                host.alias,
                host.hostname,
                host.user,
                host.port,
                host.icon,
                host.mac,
            ]
            if settings.display.show_commands:
                row.append("\n".join(c.to_directive() for c in host.commands))
            if settings.display.show_options:
                row.append("\n".join(f"{o.key} {o.value}" for o in host.options))
            table.add_row(*(escape(cell) for cell in row))

    console.print(table)
    if document.raw_blocks:
        console.print(f"{len(document.raw_blocks)} unmanaged block(s) preserved.")


@app.command()
def show(
    alias: str = typer.Argument(..., help="Host alias"),
    config_path: Path | None = CONFIG_OPTION,
    ssh_file: Path | None = FILE_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Show a host and the options ssh will actually use for it."""
    setup_logging(verbose)
    store = get_store(config_path, ssh_file)

    try:
        text = store.read_text()
        document = parse_config(text)
        host = editor.find_host(document, alias)
        resolved = resolve_host(text, alias)
    except HostbookError as e:
        raise fail(str(e))

    console.print(f"[bold]Host:[/bold] {host.alias}")
    console.print(f"[bold]Group:[/bold] {editor.find_group(document, alias) or '-'}")
    console.print(f"[bold]Icon:[/bold] {host.icon}")
    if host.mac:
        console.print(f"[bold]MAC:[/bold] {host.mac}")
    for command in host.commands:
        console.print(f"[bold]Command:[/bold] {escape(command.to_directive())}")

    table = Table(title="Effective options")
    table.add_column("Option")
    table.add_column("Value")
    for key, value in sorted(resolved.items()):
        if isinstance(value, list):
            value = ", ".join(value)
        table.add_row(key, escape(str(value)))
    console.print(table)


@app.command()
def check(
    config_path: Path | None = CONFIG_OPTION,
    ssh_file: Path | None = FILE_OPTION,
):
    """Report directives that were dropped while parsing."""
    store = get_store(config_path, ssh_file)

    try:
        _, warnings = parse_config_with_warnings(store.read_text())
    except HostbookError as e:
        raise fail(str(e))

    if not warnings:
        console.print(f"[green]OK:[/green] {store.path}")
        return

    for warning in warnings:
        console.print(
            f"[yellow]{store.path}:{warning.line_number}:[/yellow] {escape(warning.message)}", soft_wrap=True
        )
    raise typer.Exit(1)


@app.command()
def fmt(
    check_only: bool = typer.Option(False, "--check", help="Exit 1 if the file would change"),
    config_path: Path | None = CONFIG_OPTION,
    ssh_file: Path | None = FILE_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Rewrite the SSH config in normalized form."""
    setup_logging(verbose)
    store = get_store(config_path, ssh_file)

    try:
        text = store.read_text()
        document = parse_config(text)
        if document.to_text() == text:
            console.print(f"{store.path} already formatted.")
            return
        if check_only:
            console.print(f"{store.path} would be reformatted.")
            raise typer.Exit(1)
        store.save(document)
    except HostbookError as e:
        raise fail(str(e))

    console.print(f"[green]Formatted[/green] {store.path}")


@app.command()
def add(
    alias: str = typer.Argument(..., help="Host alias"),
    hostname: str = typer.Option("", "--hostname", "-H", help="HostName (defaults to alias)"),
    user: str = typer.Option("", "--user", "-u", help="User"),
    port: str = typer.Option("", "--port", "-p", help="Port"),
    identity_file: str = typer.Option("", "--identity-file", "-i", help="IdentityFile"),
    group: str = typer.Option("", "--group", "-g", help="Group name"),
    icon: str = typer.Option(DEFAULT_ICON, "--icon", help="Icon name"),
    mac: str = typer.Option("", "--mac", help="MAC address for Wake-on-LAN"),
    config_path: Path | None = CONFIG_OPTION,
    ssh_file: Path | None = FILE_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Add a host."""
    setup_logging(verbose)
    store = get_store(config_path, ssh_file)

    if mac and not is_valid_mac(mac):
        raise fail(str(InvalidMacError(mac)))

    host = Host(
        alias=alias,
        hostname=hostname,
        user=user,
        port=port,
        identity_file=identity_file,
        icon=icon,
        mac=mac,
    )
    try:
        store.save(editor.add_host(store.load(), host, group))
    except HostbookError as e:
        raise fail(str(e))

    console.print(f"[green]Added[/green] {alias}" + (f" to {group}" if group else ""))


@app.command()
def remove(
    alias: str = typer.Argument(..., help="Host alias"),
    config_path: Path | None = CONFIG_OPTION,
    ssh_file: Path | None = FILE_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Remove a host."""
    setup_logging(verbose)
    store = get_store(config_path, ssh_file)

    try:
        store.save(editor.remove_host(store.load(), alias))
    except HostbookError as e:
        raise fail(str(e))

    console.print(f"[green]Removed[/green] {alias}")


@app.command()
def move(
    alias: str = typer.Argument(..., help="Host alias"),
    group: str = typer.Argument(..., help="Target group ('' for ungrouped)"),
    config_path: Path | None = CONFIG_OPTION,
    ssh_file: Path | None = FILE_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Move a host to another group."""
    setup_logging(verbose)
    store = get_store(config_path, ssh_file)

    try:
        store.save(editor.move_host(store.load(), alias, group))
    except HostbookError as e:
        raise fail(str(e))

    console.print(f"[green]Moved[/green] {alias} to {group or 'ungrouped'}")


if __name__ == "__main__":
    app()

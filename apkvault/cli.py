"""Command Line Interface for apkvault."""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .adb import ADBDevice, ADBError, check_adb_available, list_devices
from .apps import APKInstaller, BackupResult, InstallResult, InstallStatus
from .backup import BackupExecutor, BackupExistsError, BackupStorage
from .config import ApkVaultConfig, get_config, load_config
from .util import format_duration, format_size, setup_logging

console = Console()

MODE_NEW = "1"
MODE_DIFFERENTIAL = "2"


@dataclass
class CliContext:
    """State shared by all subcommands."""

    config: ApkVaultConfig
    serial: Optional[str] = None


class UsageGroup(click.Group):
    """Command group that answers an unknown command with usage, not an error."""

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            console.print(f"[red]{escape(e.format_message())}[/red]")
            click.echo(ctx.get_usage())
            ctx.exit(0)


@click.group(cls=UsageGroup, invoke_without_command=True)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Configuration file path",
)
@click.option("--serial", "-s", help="Device serial number")
@click.option(
    "--backup-root", "-r",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory holding the backups",
)
@click.pass_context
def cli(ctx, verbose: bool, config: Optional[Path], serial: Optional[str], backup_root: Optional[Path]):
    """apkvault - back up and reinstall third-party Android apps over ADB."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)

    app_config = load_config(config) if config else get_config()
    if backup_root:
        app_config = app_config.model_copy(update={"backup_root": backup_root})

    level = "DEBUG" if verbose else app_config.log_level
    setup_logging(level=level, log_file=app_config.log_file, console=console)

    ctx.obj = CliContext(config=app_config, serial=serial)


@cli.command("backup")
@click.pass_obj
def backup(obj: CliContext):
    """Back up third-party apps (new or differential)."""
    config = obj.config

    try:
        device = _get_target_device(config, obj.serial)
        if not device:
            return

        storage = BackupStorage(config.backup_root)
        storage.ensure_root()

        base_backup = None
        if _prompt_backup_mode() == MODE_DIFFERENTIAL:
            backups = storage.list_backups()
            if not backups:
                console.print("[yellow]No backups found.[/yellow]")
                return
            base_backup = _select_backup(backups, "Select base backup:")

        name = _prompt_backup_name(storage)

        executor = BackupExecutor(device, storage, show_progress=config.show_progress)
        started = time.monotonic()
        result = executor.execute_backup(name, base_backup=base_backup)

        if result.target_dir is None:
            console.print("[yellow]No package differences found for device.[/yellow]")
            return

        _print_backup_summary(result, time.monotonic() - started)

    except ADBError as e:
        console.print(f"[red]ADB Error: {escape(str(e))}[/red]")
    except BackupExistsError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
    except OSError as e:
        console.print(f"[red]Backup failed: {escape(str(e))}[/red]")


@cli.command("install")
@click.pass_obj
def install(obj: CliContext):
    """Reinstall the apps of a previous backup."""
    config = obj.config

    try:
        device = _get_target_device(config, obj.serial)
        if not device:
            return

        storage = BackupStorage(config.backup_root)
        if not storage.exists():
            console.print("[red]Backup directory not found. Please run with 'backup' first.[/red]")
            return

        backups = storage.list_backups()
        if not backups:
            console.print("[yellow]No backups found.[/yellow]")
            return

        selected = _select_backup(backups, "Select backup to install:")

        installer = APKInstaller(
            device,
            storage,
            extensions=config.installer_extensions,
            show_progress=config.show_progress,
        )
        result = installer.install_backup(selected)
        _print_install_summary(result)

    except ADBError as e:
        console.print(f"[red]ADB Error: {escape(str(e))}[/red]")
    except OSError as e:
        console.print(f"[red]Install failed: {escape(str(e))}[/red]")


def _get_target_device(config: ApkVaultConfig, serial: Optional[str]) -> Optional[ADBDevice]:
    """Get target device for operations."""
    if not check_adb_available(config.adb_path):
        console.print("[red]Error: ADB command not found.[/red]")
        return None

    try:
        devices = list_devices(config.adb_path, config.command_timeout)
    except ADBError as e:
        console.print(f"[red]ADB Error: {escape(str(e))}[/red]")
        return None

    if not devices:
        console.print("[red]Error: Device is disconnected. Please check device connection.[/red]")
        return None

    if serial:
        device = next((d for d in devices if d.serial == serial), None)
        if not device:
            console.print(f"[red]Device with serial {escape(serial)} not found[/red]")
            _list_devices(devices)
        return device
    elif len(devices) == 1:
        return devices[0]
    else:
        console.print("[yellow]Multiple devices found. Please specify --serial[/yellow]")
        _list_devices(devices)
        return None


def _list_devices(devices: List[ADBDevice]):
    """Helper to display device list."""
    table = Table(title="Connected Devices")
    table.add_column("Serial", style="cyan")

    for device in devices:
        table.add_row(escape(device.serial))

    console.print(table)


def _prompt_backup_mode() -> str:
    console.print("[bold]Select backup mode:[/bold]")
    console.print(f"{MODE_NEW}. New Backup")
    console.print(f"{MODE_DIFFERENTIAL}. Differential Backup")
    return click.prompt("Mode", type=click.Choice([MODE_NEW, MODE_DIFFERENTIAL]), show_choices=False)


def _select_backup(backups: List[Path], title: str) -> Path:
    """Let the user pick a backup by its 1-based index."""
    console.print(f"[bold]{title}[/bold]")
    for i, backup_dir in enumerate(backups, start=1):
        console.print(f"{i}: {escape(backup_dir.name)}")

    index = click.prompt("Enter number", type=click.IntRange(1, len(backups)))
    return backups[index - 1]


def _prompt_backup_name(storage: BackupStorage) -> str:
    """Ask for a backup name until one is free."""
    console.print("Enter backup name (or leave empty for timestamp, $date inserts it):")

    while True:
        raw_name = click.prompt(">", default="", show_default=False, prompt_suffix=" ")
        name = storage.resolve_backup_name(raw_name)

        if storage.backup_path(name).exists():
            console.print("[red]Folder already exists. Try another name.[/red]")
            continue

        return name


def _print_backup_summary(result: BackupResult, elapsed: float):
    table = Table(title="Backup Summary")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Location", escape(str(result.target_dir)))
    table.add_row("Packages", str(result.total))
    table.add_row("Successful", str(len(result.succeeded)))
    table.add_row("Failed", str(len(result.failed)))
    table.add_row("Files", str(result.file_count))
    table.add_row("Size", format_size(result.total_size))
    table.add_row("Duration", format_duration(elapsed))

    console.print(table)

    if result.failed:
        console.print(f"[yellow]Failed: {len(result.failed)}[/yellow]")
        for package in result.failed[:5]:  # Show first 5 errors
            console.print(f"  {escape(package.package)}: {escape(package.error)}")

    console.print(f"[bold green]Backup completed: {len(result.succeeded)}/{result.total} packages[/bold green]")


def _print_install_summary(result: InstallResult):
    table = Table(title=f"Install - {escape(result.backup_dir.name)}")
    table.add_column("Package", style="cyan")
    table.add_column("Status", style="white")
    table.add_column("Files", style="white")
    table.add_column("Detail", style="white")

    styles = {
        InstallStatus.INSTALLED: "[green]✓ installed[/green]",
        InstallStatus.FAILED: "[red]✗ failed[/red]",
        InstallStatus.SKIPPED: "[yellow]skipped[/yellow]",
    }

    for package in result.packages:
        detail = package.message.splitlines()[-1] if package.message else ""
        table.add_row(
            escape(package.package),
            styles[package.status],
            str(len(package.files)),
            escape(detail),
        )

    console.print(table)
    console.print(
        f"[bold green]Installed {result.installed}/{len(result.packages)} packages[/bold green]"
        f" ({result.failed} failed, {result.skipped} skipped)"
    )


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()

# s3apt/cli/utils/output.py
"""Output formatting utilities"""

from typing import Dict, List

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from ...api.exceptions import S3AptError
from ...models import PackageRecord, PublishResult, VerifyResult

console = Console()


def print_error(error: S3AptError) -> None:
    """Display a repository error"""
    title = "Error"
    if error.error_code:
        title = f"Error {error.error_code}"

    console.print(Panel(
        f"[red]✗[/red] {error}",
        title=f"[bold red]{title}[/bold red]",
        border_style="red"
    ))


def format_publish_result(result: PublishResult, action: str = "Publish") -> None:
    """Format and display an upload or delete result"""
    if not result.success:
        console.print(Panel(
            f"[red]✗ {action} failed:[/red] {result.error}",
            title=f"{action} Error",
            border_style="red"
        ))
        return

    lines = [
        f"[green]✓[/green] {action} completed successfully!",
        "",
        f"[bold]Codename:[/bold] {result.codename}",
        f"[bold]Component:[/bold] {result.component}",
    ]

    if result.added:
        lines.append("")
        lines.append("[bold]Added:[/bold]")
        for record in result.added:
            lines.append(f"  • {record}")

    if result.removed:
        lines.append("")
        lines.append("[bold]Removed:[/bold]")
        for record in result.removed:
            lines.append(f"  • {record}")

    lines.append("")
    lines.append(f"[bold]Objects written:[/bold] {len(result.written_keys)}")
    if result.duration is not None:
        lines.append(f"[bold]Duration:[/bold] {result.duration:.1f}s")

    console.print(Panel("\n".join(lines), title=f"{action} Result", border_style="green"))


def format_package_table(packages: Dict[str, List[PackageRecord]]) -> None:
    """Display indexed packages per architecture"""
    table = Table(box=box.SIMPLE)
    table.add_column("Package", style="cyan")
    table.add_column("Version", style="green")
    table.add_column("Architecture", style="yellow")
    table.add_column("Index", style="dim")

    total = 0
    for arch, records in packages.items():
        for record in records:
            table.add_row(record.name, record.full_version, record.architecture, arch)
            total += 1

    if total == 0:
        console.print("[yellow]No packages found[/yellow]")
        return

    console.print(table)
    console.print(f"[dim]{total} record(s)[/dim]")


def format_verify_result(result: VerifyResult) -> None:
    """Display a verification result"""
    if result.is_valid:
        console.print(
            f"[green]✓[/green] {result.checked} record(s) checked in "
            f"{result.codename}/{result.component}, all package files present"
        )
        return

    table = Table(title="Missing package files", box=box.SIMPLE)
    table.add_column("Index", style="dim")
    table.add_column("Package", style="cyan")
    table.add_column("File", style="red")
    for missing in result.missing:
        table.add_row(missing.architecture, str(missing.record), missing.record.url_filename)
    console.print(table)

    if result.fixed:
        console.print(f"[green]✓[/green] Removed {len(result.missing)} record(s) and republished")
    else:
        console.print("[yellow]Run with --fix to drop these records[/yellow]")

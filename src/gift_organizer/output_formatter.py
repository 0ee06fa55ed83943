"""Output formatting for CLI and programmatic use."""

import json
from datetime import date
from decimal import Decimal
from typing import Any
from uuid import UUID

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table


class JSONEncoder(json.JSONEncoder):
    """Custom JSON encoder for output."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, UUID):
            return str(obj)
        if isinstance(obj, date):
            return obj.isoformat()
        if isinstance(obj, Decimal):
            return str(obj)
        return super().default(obj)


STATUS_STYLES = {
    "Purchased": "green",
    "Pending": "yellow",
}


class OutputFormatter:
    """Formats output for both Rich terminal and JSON modes."""

    def __init__(self, json_mode: bool = False):
        """Initialize formatter.

        Args:
            json_mode: If True, output JSON instead of Rich formatting
        """
        self.json_mode = json_mode
        self.console = Console()

    def output(self, data: dict[str, Any], message: str = "") -> None:
        """Output data in appropriate format.

        Args:
            data: Data to output
            message: Optional message for Rich mode
        """
        if self.json_mode:
            self._output_json(data)
        else:
            self._output_rich(data, message)

    def _output_json(self, data: dict[str, Any]) -> None:
        """Output as JSON to stdout."""
        print(json.dumps(data, cls=JSONEncoder, indent=2))

    def _output_rich(self, data: dict[str, Any], message: str) -> None:
        """Output with Rich formatting."""
        if message:
            self.console.print(f"[green]✓[/green] {escape(message)}")

        payload = data.get("data", {})
        if "gifts" in payload:
            self._render_gift_list(payload["gifts"])
        elif "gift" in payload:
            self._render_gift(payload["gift"])
        elif "recipients" in payload:
            self._render_named_list("Recipients", payload["recipients"])
        elif "categories" in payload:
            self._render_named_list("Categories", payload["categories"])

    def _render_gift_list(self, gifts: list[dict]) -> None:
        """Render gift list with Rich."""
        if not gifts:
            self.console.print("[dim]No gifts found[/dim]")
            return

        table = Table(title="Gift List", show_header=True, header_style="bold cyan")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Gift", style="cyan", no_wrap=False)
        table.add_column("Recipient", style="magenta")
        table.add_column("Category", style="yellow")
        table.add_column("Price", justify="right")
        table.add_column("Store", style="green")
        table.add_column("Status")

        for gift in gifts:
            status = gift["status"]
            style = STATUS_STYLES.get(status, "white")
            table.add_row(
                str(gift.get("position", "")),
                escape(gift["name"]),
                escape(gift["recipient"]["name"]),
                escape(gift["category"]["name"]),
                f"${Decimal(gift['price']):.2f}",
                escape(gift.get("store") or "-"),
                f"[{style}]{status}[/{style}]",
            )

        self.console.print(table)
        self.console.print(f"\nTotal gifts: {len(gifts)}")

    def _render_gift(self, gift: dict) -> None:
        """Render a single gift with Rich."""
        style = STATUS_STYLES.get(gift["status"], "white")
        panel_content = f"""[bold]{escape(gift["name"])}[/bold]

Recipient: {escape(gift["recipient"]["name"])}
Category: {escape(gift["category"]["name"])}
Price: ${Decimal(gift["price"]):.2f}
Store: {escape(gift.get("store") or "Not specified")}
Purchase Date: {gift["purchase_date"]}
Status: [{style}]{gift["status"]}[/{style}]"""

        if gift.get("description"):
            panel_content += f"\nDescription: {escape(gift['description'])}"

        panel_content += f"\n[dim]ID: {gift['id']}[/dim]"

        panel = Panel(panel_content, title="Gift Details", border_style="green")
        self.console.print(panel)

    def _render_named_list(self, title: str, records: list[dict]) -> None:
        """Render recipients or categories with Rich."""
        if not records:
            self.console.print(f"[dim]No {title.lower()} yet[/dim]")
            return

        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Name", style="cyan")
        table.add_column("ID", style="dim")

        for i, record in enumerate(records):
            table.add_row(str(i), escape(record["name"]), record["id"])

        self.console.print(table)

    def error(self, message: str, error_code: str | None = None) -> None:
        """Output error message.

        Args:
            message: Error message
            error_code: Optional error code
        """
        if self.json_mode:
            output = {"success": False, "error": message}
            if error_code:
                output["error_code"] = error_code
            print(json.dumps(output))
        else:
            self.console.print(f"[red]✗ Error:[/red] {escape(message)}")

    def warning(self, message: str) -> None:
        """Output warning message.

        Args:
            message: Warning message
        """
        if self.json_mode:
            print(json.dumps({"warning": message}))
        else:
            self.console.print(f"[yellow]⚠[/yellow] {escape(message)}")

"""CLI entry point for Gift Organizer."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Annotated, Any
from uuid import UUID

import typer

from .config import ConfigManager
from .data_store import create_slot_store
from .errors import (
    ConfigError,
    GiftNotFoundError,
    GiftOrganizerError,
    GiftValidationError,
    PersistenceError,
    PositionOutOfRangeError,
)
from .gift_input import GiftInput
from .gift_store import GiftStore
from .log import configure_logging
from .models import Category, Gift, GiftStatus, Recipient
from .output_formatter import OutputFormatter
from .query import query

app = typer.Typer(
    name="gifts",
    help="Keep track of gifts, who they are for, and what they cost",
    no_args_is_help=True,
)

recipient_app = typer.Typer(help="Manage gift recipients")
app.add_typer(recipient_app, name="recipient")

category_app = typer.Typer(help="Manage gift categories")
app.add_typer(category_app, name="category")

ERROR_CODES: dict[type[GiftOrganizerError], str] = {
    ConfigError: "CONFIG_ERROR",
    GiftValidationError: "VALIDATION_ERROR",
    GiftNotFoundError: "GIFT_NOT_FOUND",
    PositionOutOfRangeError: "POSITION_OUT_OF_RANGE",
    PersistenceError: "PERSISTENCE_ERROR",
}


@dataclass
class AppState:
    """Objects shared by every command of one invocation."""

    config: ConfigManager
    formatter: OutputFormatter
    store: GiftStore

    def emit(self, result: dict[str, Any], message: str = "") -> None:
        """Output a result, carrying any startup load errors along."""
        if self.store.load_errors and self.formatter.json_mode:
            result["warnings"] = self.load_warnings()
        self.formatter.output(result, message)

    def fail(self, error: GiftOrganizerError) -> None:
        """Report an error and exit with status 1."""
        self.formatter.error(str(error), error_code=ERROR_CODES.get(type(error)))
        raise typer.Exit(code=1)

    def load_warnings(self) -> list[str]:
        return [
            f"Stored {slot.value} could not be read and were ignored ({reason})"
            for slot, reason in self.store.load_errors.items()
        ]


def _state(ctx: typer.Context) -> AppState:
    return ctx.obj


@app.callback()
def main(
    ctx: typer.Context,
    json_output: Annotated[
        bool, typer.Option("--json", help="Output as JSON for programmatic use")
    ] = False,
    data_dir: Annotated[Path | None, typer.Option("--data-dir", help="Data directory path")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
) -> None:
    """Gift Organizer CLI - Track gifts for everyone on your list."""
    formatter = OutputFormatter(json_mode=json_output)

    try:
        config = ConfigManager()
    except ConfigError as e:
        formatter.error(str(e), error_code="CONFIG_ERROR")
        raise typer.Exit(code=1)
    configure_logging("DEBUG" if verbose else config.logging.level)

    # CLI --data-dir overrides config, which overrides default
    effective_data_dir = data_dir if data_dir else config.data.storage_dir
    slot_store = create_slot_store(backend=config.data.backend, data_dir=effective_data_dir)
    state = AppState(config=config, formatter=formatter, store=GiftStore(slot_store))

    if not json_output:
        for warning in state.load_warnings():
            formatter.warning(warning)

    ctx.obj = state


def _find_named(records: list[Recipient] | list[Category], ref: str):
    """Find a recipient or category by ID or case-insensitive name."""
    for record in records:
        if str(record.id) == ref or record.name.lower() == ref.lower():
            return record
    return None


def _resolve_gift(store: GiftStore, gift_id: str) -> Gift:
    try:
        gift = store.get_gift(UUID(gift_id))
    except ValueError:
        gift = None
    if gift is None:
        raise GiftNotFoundError(gift_id)
    return gift


def _select(store: GiftStore, recipient: str | None, category: str | None, form: GiftInput) -> None:
    """Put the chosen recipient and category into the form."""
    if recipient is not None:
        found = _find_named(store.recipients, recipient)
        if found is None:
            raise GiftValidationError("recipient", f"Recipient '{recipient}' not found.")
        form.recipient = found
    if category is not None:
        found = _find_named(store.categories, category)
        if found is None:
            raise GiftValidationError("category", f"Category '{category}' not found.")
        form.category = found


def _gift_rows(store: GiftStore, gifts: list[Gift]) -> list[dict]:
    """Dump gifts with their stored positions attached."""
    positions = {g.id: i for i, g in enumerate(store.gifts)}
    rows = []
    for gift in gifts:
        row = gift.model_dump(mode="json")
        row["position"] = positions[gift.id]
        rows.append(row)
    return rows


@app.command()
def add(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Gift name")],
    price: Annotated[str, typer.Option("--price", "-p", help="Price paid or expected")] = "",
    recipient: Annotated[
        str | None, typer.Option("--recipient", "-r", help="Recipient name or ID")
    ] = None,
    category: Annotated[
        str | None, typer.Option("--category", "-c", help="Category name or ID")
    ] = None,
    description: Annotated[str, typer.Option("--description", "-d", help="Description")] = "",
    store: Annotated[str | None, typer.Option("--store", "-s", help="Store to buy from")] = None,
    status: Annotated[
        GiftStatus | None,
        typer.Option("--status", case_sensitive=False, help="Pending or Purchased"),
    ] = None,
    purchase_date: Annotated[
        datetime | None,
        typer.Option("--date", formats=["%Y-%m-%d"], help="Purchase date (YYYY-MM-DD)"),
    ] = None,
) -> None:
    """Add a gift."""
    state = _state(ctx)
    try:
        form = GiftInput(
            name=name,
            description=description,
            price=price,
            store=store if store is not None else state.config.defaults.store,
            status=status or state.config.defaults.status,
        )
        if purchase_date is not None:
            form.purchase_date = purchase_date.date()
        _select(state.store, recipient, category, form)

        gift = form.build_gift()
        state.store.add_gift(gift)
        result = {
            "success": True,
            "message": f"Added {gift.name} for {gift.recipient.name}",
            "data": {"gift": gift.model_dump(mode="json")},
        }
        state.emit(result, result["message"])
    except GiftOrganizerError as e:
        state.fail(e)


@app.command(name="list")
def list_gifts(
    ctx: typer.Context,
    search: Annotated[str, typer.Option("--search", "-s", help="Filter by name")] = "",
    descending: Annotated[bool, typer.Option("--desc", help="Sort names Z to A")] = False,
) -> None:
    """View gifts, sorted by name."""
    state = _state(ctx)
    gifts = query(state.store.gifts, search, ascending=not descending)
    state.emit(
        {
            "success": True,
            "data": {"gifts": _gift_rows(state.store, gifts), "total": len(gifts)},
        }
    )


@app.command()
def show(
    ctx: typer.Context,
    gift_id: Annotated[str, typer.Argument(help="Gift ID")],
) -> None:
    """Show one gift."""
    state = _state(ctx)
    try:
        gift = _resolve_gift(state.store, gift_id)
        state.emit({"success": True, "data": {"gift": gift.model_dump(mode="json")}})
    except GiftOrganizerError as e:
        state.fail(e)


@app.command()
def edit(
    ctx: typer.Context,
    gift_id: Annotated[str, typer.Argument(help="Gift ID")],
    name: Annotated[str | None, typer.Option("--name", "-n", help="New name")] = None,
    price: Annotated[str | None, typer.Option("--price", "-p", help="New price")] = None,
    recipient: Annotated[
        str | None, typer.Option("--recipient", "-r", help="Recipient name or ID")
    ] = None,
    category: Annotated[
        str | None, typer.Option("--category", "-c", help="Category name or ID")
    ] = None,
    description: Annotated[
        str | None, typer.Option("--description", "-d", help="New description")
    ] = None,
    store: Annotated[str | None, typer.Option("--store", "-s", help="New store")] = None,
    status: Annotated[
        GiftStatus | None,
        typer.Option("--status", case_sensitive=False, help="Pending or Purchased"),
    ] = None,
    purchase_date: Annotated[
        datetime | None,
        typer.Option("--date", formats=["%Y-%m-%d"], help="Purchase date (YYYY-MM-DD)"),
    ] = None,
) -> None:
    """Edit a gift. Unchanged fields keep their current values."""
    state = _state(ctx)
    try:
        existing = _resolve_gift(state.store, gift_id)
        form = GiftInput.from_gift(existing)
        if name is not None:
            form.name = name
        if price is not None:
            form.price = price
        if description is not None:
            form.description = description
        if store is not None:
            form.store = store
        if status is not None:
            form.status = status
        if purchase_date is not None:
            form.purchase_date = purchase_date.date()
        _select(state.store, recipient, category, form)

        gift = form.build_gift(gift_id=existing.id)
        if not state.store.update_gift(gift):
            raise GiftNotFoundError(existing.id)
        result = {
            "success": True,
            "message": f"Updated {gift.name}",
            "data": {"gift": gift.model_dump(mode="json")},
        }
        state.emit(result, result["message"])
    except GiftOrganizerError as e:
        state.fail(e)


@app.command()
def remove(
    ctx: typer.Context,
    positions: Annotated[list[int], typer.Argument(help="Positions shown by 'list'")],
) -> None:
    """Remove gifts by position."""
    state = _state(ctx)
    try:
        removed = state.store.delete_gifts(positions)
        result = {
            "success": True,
            "message": f"Removed {len(removed)} gift(s)",
            "data": {"removed": [g.model_dump(mode="json") for g in removed]},
        }
        state.emit(result, result["message"])
    except GiftOrganizerError as e:
        state.fail(e)


# --- Recipients ---


@recipient_app.command("add")
def recipient_add(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Recipient name")],
) -> None:
    """Add a recipient."""
    state = _state(ctx)
    try:
        if not name.strip():
            raise GiftValidationError("name", "Recipient name cannot be empty.")
        recipient = Recipient(name=name)
        state.store.add_recipient(recipient)
        result = {
            "success": True,
            "message": f"Added recipient {name}",
            "data": {"recipients": [recipient.model_dump(mode="json")]},
        }
        state.emit(result, result["message"])
    except GiftOrganizerError as e:
        state.fail(e)


@recipient_app.command("list")
def recipient_list(ctx: typer.Context) -> None:
    """List recipients."""
    state = _state(ctx)
    recipients = [r.model_dump(mode="json") for r in state.store.recipients]
    state.emit({"success": True, "data": {"recipients": recipients}})


@recipient_app.command("remove")
def recipient_remove(
    ctx: typer.Context,
    positions: Annotated[list[int], typer.Argument(help="Positions shown by 'recipient list'")],
) -> None:
    """Remove recipients by position. Gifts keep their copy of the recipient."""
    state = _state(ctx)
    try:
        removed = state.store.delete_recipients(positions)
        result = {
            "success": True,
            "message": f"Removed {len(removed)} recipient(s)",
            "data": {"removed": [r.model_dump(mode="json") for r in removed]},
        }
        state.emit(result, result["message"])
    except GiftOrganizerError as e:
        state.fail(e)


# --- Categories ---


@category_app.command("add")
def category_add(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Category name")],
) -> None:
    """Add a category."""
    state = _state(ctx)
    try:
        if not name.strip():
            raise GiftValidationError("name", "Category name cannot be empty.")
        category = Category(name=name)
        state.store.add_category(category)
        result = {
            "success": True,
            "message": f"Added category {name}",
            "data": {"categories": [category.model_dump(mode="json")]},
        }
        state.emit(result, result["message"])
    except GiftOrganizerError as e:
        state.fail(e)


@category_app.command("list")
def category_list(ctx: typer.Context) -> None:
    """List categories."""
    state = _state(ctx)
    categories = [c.model_dump(mode="json") for c in state.store.categories]
    state.emit({"success": True, "data": {"categories": categories}})


@category_app.command("remove")
def category_remove(
    ctx: typer.Context,
    positions: Annotated[list[int], typer.Argument(help="Positions shown by 'category list'")],
) -> None:
    """Remove categories by position. Gifts keep their copy of the category."""
    state = _state(ctx)
    try:
        removed = state.store.delete_categories(positions)
        result = {
            "success": True,
            "message": f"Removed {len(removed)} categor{'y' if len(removed) == 1 else 'ies'}",
            "data": {"removed": [c.model_dump(mode="json") for c in removed]},
        }
        state.emit(result, result["message"])
    except GiftOrganizerError as e:
        state.fail(e)


if __name__ == "__main__":
    app()

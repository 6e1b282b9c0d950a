"""Text and JSON rendering of a computed load order."""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from rich.console import Console
from rich.table import Table

from nt_load_order.cli.output import machine_output
from nt_load_order.types import Entry

ABSENT_MARKER = "<none>"


class EntryModel(BaseModel):
    """JSON form of one load order entry."""

    model_config = ConfigDict(strict=True)

    position: int = Field(ge=1)
    name: str
    image_path: str
    group: str | None
    tag: int | None
    reason: str
    is_kernel_binary: bool

    @staticmethod
    def from_entry(position: int, entry: Entry) -> "EntryModel":
        return EntryModel(
            position=position,
            name=entry.name,
            image_path=entry.image_path,
            group=entry.group.display_name if entry.group is not None else None,
            tag=entry.tag,
            reason=entry.reason,
            is_kernel_binary=entry.is_kernel_binary,
        )


class LoadOrderResponse(BaseModel):
    """JSON response of the show command."""

    model_config = ConfigDict(strict=True)

    entries: list[EntryModel]


class ErrorResponse(BaseModel):
    """Pydantic model for error JSON responses.

    Attributes:
        error: Error message
        error_type: Error class name (e.g., "RegistryKeyNotFoundError")
        exit_code: Exit code for the process
    """

    model_config = ConfigDict(strict=True)

    error: str
    error_type: str
    exit_code: int = Field(default=1, ge=0, le=255)


def format_option(value: Any) -> str:
    if value is None:
        return ABSENT_MARKER
    return str(value)


def build_entries_table(entries: list[Entry]) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right", no_wrap=True)
    table.add_column("Group", no_wrap=True)
    table.add_column("Tag", justify="right", no_wrap=True)
    table.add_column("Service", style="cyan", no_wrap=True)
    table.add_column("Image Path", no_wrap=True)
    table.add_column("Reason")

    for position, entry in enumerate(entries, start=1):
        table.add_row(
            str(position),
            format_option(entry.group.display_name if entry.group is not None else None),
            format_option(entry.tag),
            entry.name,
            entry.image_path,
            entry.reason,
            # Kernel binaries have fixed positions.
            style="bold" if entry.is_kernel_binary else None,
        )

    return table


def render_entries_table(entries: list[Entry]) -> None:
    # markup/highlight off: image paths and reasons are data, not rich markup
    console = Console(width=250, markup=False, highlight=False)
    console.print(build_entries_table(entries))


def emit_json(data: dict[str, Any]) -> None:
    """Output JSON data to stdout for machine consumption."""
    machine_output(json.dumps(data, indent=2))


def emit_entries_json(entries: list[Entry]) -> None:
    response = LoadOrderResponse(
        entries=[EntryModel.from_entry(position, entry) for position, entry in enumerate(entries, 1)]
    )
    emit_json(response.model_dump(mode="json"))


def emit_json_error(error: str, error_type: str, exit_code: int = 1) -> None:
    """Output error as JSON and exit.

    Raises:
        SystemExit: Always raises to terminate with specified exit code
    """
    error_response = ErrorResponse(error=error, error_type=error_type, exit_code=exit_code)
    emit_json(error_response.model_dump(mode="json"))
    raise SystemExit(exit_code)

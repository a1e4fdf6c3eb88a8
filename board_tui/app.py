"""Task board TUI: browse a kanban directory by status and process items."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.logging import TextualHandler
from textual.widgets import Footer, Header, OptionList, RichLog, Static
from textual.widgets.option_list import Option

from taskmanager.board import Board, BoardFormatError, scan_board
from taskmanager.events import DomainEvent
from taskmanager.execution.convenience import build_processor, create_in_memory_services
from taskmanager.model import ItemKind, ToDoItem, ToDoItemStatus
from taskmanager.processor import UnsupportedToDoItemType, supports

COLUMNS = list(ToDoItemStatus)
COLUMN_IDS = [f"col-{s.value}" for s in COLUMNS]

KIND_COLORS = {
    ItemKind.EPIC: "magenta",
    ItemKind.STORY: "cyan",
    ItemKind.TASK: "green",
    ItemKind.GENERIC: "white",
}


def item_label(item: ToDoItem) -> str:
    prefix = item.kind.value[0].upper()
    label = f"[bold {KIND_COLORS[item.kind]}]{prefix}-{item.id:02d}[/] {item.title}"
    if not supports(item):
        label += " [dim](no action)[/]"
    return label


def column_title(status: ToDoItemStatus, count: int) -> str:
    return f"[bold underline]{status.value.replace('_', ' ').title()}[/] [dim]({count})[/]"


def _option_id(item: ToDoItem) -> str:
    return f"item-{item.id}"


def _item_id(option_id: str) -> int:
    return int(option_id.removeprefix("item-"))


class TaskBoardApp(App):
    TITLE = "Task Board"

    CSS = """
    #board {
        height: 1fr;
    }

    .column {
        width: 1fr;
        height: 100%;
        border-right: solid $surface-lighten-2;
    }

    .column.active-col {
        border-right: solid $accent;
        border-left: solid $accent;
    }

    .column-header {
        text-align: center;
        background: $surface-lighten-1;
        height: 1;
    }

    .column OptionList {
        height: 1fr;
        border: none;
    }

    #event-log {
        height: 8;
        border-top: solid $primary;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "reload", "Reload"),
        Binding("p", "process_item", "Process"),
        Binding("left", "col_left", "< Col", show=True),
        Binding("right", "col_right", "Col >", show=True),
    ]

    def __init__(self, kanban_dir: Path | None = None) -> None:
        super().__init__()
        self.kanban_dir = kanban_dir or Path.cwd() / "kanban"
        self.board = Board()
        self.services = create_in_memory_services()
        self.processor = build_processor(self.services)
        self.active_col_index: int = 0

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="board"):
            for status in COLUMNS:
                with Vertical(classes="column", id=f"column-{status.value}"):
                    yield Static(column_title(status, 0), id=f"header-{status.value}", classes="column-header")
                    yield OptionList(id=f"col-{status.value}")
        yield RichLog(id="event-log", markup=False, wrap=True)
        yield Footer()

    def on_mount(self) -> None:
        self._load_board()
        self._focus_active_col()

    def _load_board(self) -> None:
        try:
            self.board = scan_board(self.kanban_dir)
        except BoardFormatError as e:
            self.board = Board()
            self.notify(str(e), severity="error")

        # Fresh collaborators so backlogs match what is on disk
        self.services = create_in_memory_services(self.board)
        self.services.events_registry.subscribe(DomainEvent, self._log_event)
        self.processor = build_processor(self.services)
        self._refresh_columns()

    def _refresh_columns(self) -> None:
        for status in COLUMNS:
            items = self.board.items_in(status)
            self.query_one(f"#header-{status.value}", Static).update(column_title(status, len(items)))
            option_list = self.query_one(f"#col-{status.value}", OptionList)
            previous = option_list.highlighted
            option_list.clear_options()
            option_list.add_options([Option(item_label(i), id=_option_id(i)) for i in items])
            if items:
                option_list.highlighted = min(previous or 0, len(items) - 1)

    def _column_list(self, col_index: int) -> OptionList:
        return self.query_one(f"#{COLUMN_IDS[col_index]}", OptionList)

    def _focus_active_col(self) -> None:
        for i, status in enumerate(COLUMNS):
            column = self.query_one(f"#column-{status.value}", Vertical)
            column.set_class(i == self.active_col_index, "active-col")
        self._column_list(self.active_col_index).focus()

    def _sync_active_col(self) -> None:
        focused = self.focused
        if isinstance(focused, OptionList) and focused.id in COLUMN_IDS:
            self.active_col_index = COLUMN_IDS.index(focused.id)

    def selected_item(self) -> ToDoItem | None:
        self._sync_active_col()
        option_list = self._column_list(self.active_col_index)
        if option_list.highlighted is None:
            return None
        option = option_list.get_option_at_index(option_list.highlighted)
        return self.board.items.get(_item_id(option.id))

    def _log_event(self, event: DomainEvent) -> None:
        self.query_one("#event-log", RichLog).write(f"event: {event}")

    # --- Actions ---

    def action_reload(self) -> None:
        self._load_board()
        self.notify("Board reloaded")

    def action_process_item(self) -> None:
        item = self.selected_item()
        if item is None:
            self.notify("Select an item first", severity="warning")
            return

        log = self.query_one("#event-log", RichLog)
        notifications = self.services.communication_service.notifications
        already_sent = len(notifications)
        try:
            self.processor.process_for(item)
        except UnsupportedToDoItemType as e:
            log.write(f"error: {e}")
            self.notify(str(e), severity="error")
            return
        except (KeyError, ValueError) as e:
            log.write(f"error: {e}")
            self.notify(f"Processing failed: {e}", severity="error")
            return

        log.write(f"processed {item.kind.value} {item.id}")
        for n in notifications[already_sent:]:
            log.write(f"notified {n.recipient} ({n.kind})")
        # Story status may have changed through the story service
        self._refresh_columns()

    def action_col_left(self) -> None:
        self._sync_active_col()
        if self.active_col_index > 0:
            self.active_col_index -= 1
        self._focus_active_col()

    def action_col_right(self) -> None:
        self._sync_active_col()
        if self.active_col_index < len(COLUMNS) - 1:
            self.active_col_index += 1
        self._focus_active_col()


def run_board() -> None:
    """Entry point for the taskmanager-board CLI."""
    # Log records go to the textual devtools console instead of the terminal
    logging.basicConfig(level=logging.INFO, handlers=[TextualHandler()])
    kanban_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    app = TaskBoardApp(kanban_dir)
    app.run()

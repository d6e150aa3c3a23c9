"""Modal dialog reporting a failed load."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Static

RETRY = "retry"
CLOSE = "close"


class ErrorDialog(ModalScreen[str]):
    """Shows an error message and returns the chosen action key."""

    BINDINGS = [
        Binding("escape", "close", "Close", show=False),
        Binding("r", "retry", "Retry", show=False),
    ]

    def __init__(
        self,
        title: str,
        message: str,
        options: list[tuple[str, str]] | None = None,
        **kwargs,
    ) -> None:
        """Initialize the error dialog.

        Args:
            title: Dialog title
            message: Error message to display
            options: List of (key, label) tuples for action buttons
        """
        super().__init__(**kwargs)
        self.dialog_title = title
        self.message = message
        self.options = options or [(RETRY, "Retry"), (CLOSE, "Close")]

    def compose(self) -> ComposeResult:
        with Container(id="error-dialog"):
            yield Static(f"[bold red]{self.dialog_title}[/]", id="error-title")
            yield Static(self.message, id="error-message", markup=False)
            with Horizontal(id="error-actions"):
                for key, label in self.options:
                    yield Button(label, id=f"btn-{key}")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id and button_id.startswith("btn-"):
            self.dismiss(button_id[len("btn-"):])

    def action_close(self) -> None:
        self.dismiss(CLOSE)

    def action_retry(self) -> None:
        self.dismiss(RETRY)

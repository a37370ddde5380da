"""Single-value prompt modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static


class PromptModal(ModalScreen[int | float | str | None]):
    """Prompt for a bounded number, or free text when `numeric` is False.

    With `decimal` set the number may carry up to two decimal places and is
    returned as a float. An empty answer falls back to `default` when one
    is given.
    """

    CSS = """
    PromptModal {
        align: center middle;
        background: $background 60%;
    }

    #prompt-dialog {
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #prompt-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #prompt-text {
        color: white;
        margin-bottom: 1;
    }

    #prompt-value {
        border: heavy $secondary;
        padding: 0 1;
        color: white;
        margin-bottom: 1;
    }

    #prompt-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #prompt-help {
        color: #dddddd;
    }
    """

    def __init__(
        self,
        title: str,
        prompt: str,
        numeric: bool = True,
        minimum: int = 0,
        maximum: int = 1000,
        default: str = "",
        decimal: bool = False,
        max_length: int = 40,
    ) -> None:
        super().__init__()
        self.title_text = title
        self.prompt_text = prompt
        self.numeric = numeric
        self.minimum = minimum
        self.maximum = maximum
        self.default = default
        self.decimal = decimal
        self.max_length = max_length
        self.value = ""
        self.error = ""

    def compose(self) -> ComposeResult:
        if self.numeric and self.decimal:
            help_text = "Digits and one '.'. Enter confirm. Backspace delete. Esc/Ctrl+C cancel."
        elif self.numeric:
            help_text = "Digits only. Enter confirm. Backspace delete. Esc/Ctrl+C cancel."
        else:
            help_text = "Type text. Enter confirm. Backspace delete. Esc/Ctrl+C cancel."
        with Container(id="prompt-dialog"):
            yield Static(self.title_text, id="prompt-title")
            yield Static(self.prompt_text, id="prompt-text")
            yield Static(id="prompt-value")
            yield Static(id="prompt-error")
            yield Static(help_text, id="prompt-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "ctrl+c"}:
            self.dismiss(None)
            event.stop()
            return

        if event.key == "enter":
            self._confirm()
            event.stop()
            return

        if event.key == "backspace":
            if self.value:
                self.value = self.value[:-1]
                self.error = ""
                self._refresh_content()
            event.stop()
            return

        if not event.is_printable or not event.character:
            return

        if self.numeric:
            if self._accepts(event.character):
                self.value += event.character
        elif len(self.value) < self.max_length:
            self.value += event.character
        self.error = ""
        self._refresh_content()
        event.stop()

    def _accepts(self, character: str) -> bool:
        whole, dot, fraction = self.value.partition(".")
        if character == ".":
            return self.decimal and not dot
        if not character.isdigit():
            return False
        if dot:
            return len(fraction) < 2
        return len(whole) < len(str(self.maximum))

    def _confirm(self) -> None:
        if not self.numeric:
            self.dismiss(self.value.strip() or self.default)
            return

        raw = self.value or self.default
        if raw in ("", "."):
            self.error = "A number is required."
            self._refresh_content()
            return

        parsed = float(raw) if self.decimal else int(raw)
        if not (self.minimum <= parsed <= self.maximum):
            self.error = f"Enter a number from {self.minimum} to {self.maximum}."
            self._refresh_content()
            return

        self.dismiss(parsed)

    def _refresh_content(self) -> None:
        value_widget = self.query_one("#prompt-value", Static)
        error_widget = self.query_one("#prompt-error", Static)
        value_widget.update(Text(self.value))
        error_widget.update(self.error or "")

"""Terminal spinner shown while the upload request is in flight.

Purely cosmetic: rich refreshes the spinner on its own thread, and nothing
here can change the outcome of a run.  Problems are logged as warnings.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger
from rich.console import Console
from rich.errors import LiveError, StyleSyntaxError
from rich.status import Status
from rich.style import Style

if TYPE_CHECKING:
    from types import TracebackType

_FALLBACK_SPINNER = "line"
# rich's "line" frames tick every 130ms; slow them to ~174ms per frame.
_SPEED = 0.75


class ProgressReporter:
    """Indeterminate spinner on stderr, used as a context manager.

    ``final_message`` is printed after the spinner stops, only when the
    ``with`` block exits without an exception.
    """

    def __init__(
        self,
        text: str,
        *,
        spinner: str = _FALLBACK_SPINNER,
        style: str = "bright_cyan",
        final_message: str | None = None,
        console: Console | None = None,
    ) -> None:
        """Build the spinner; invalid styling is logged and ignored."""
        self.console = console or Console(stderr=True)
        self.final_message = final_message
        self._status = self._build_status(text, spinner, self._check_style(style))
        self._running = False

    @staticmethod
    def _check_style(style: str) -> str:
        try:
            Style.parse(style)
        except StyleSyntaxError as e:
            logger.warning(f"Spinner style {style!r} ignored: {e}")
            return ""
        return style

    def _build_status(self, text: str, spinner: str, style: str) -> Status:
        try:
            return Status(
                text,
                console=self.console,
                spinner=spinner,
                spinner_style=style,
                speed=_SPEED,
            )
        except KeyError as e:
            logger.warning(f"Spinner {spinner!r} unavailable ({e}), using default")
            return Status(
                text,
                console=self.console,
                spinner=_FALLBACK_SPINNER,
                spinner_style=style,
                speed=_SPEED,
            )

    def start(self) -> None:
        """Start the animation."""
        try:
            self._status.start()
        except (LiveError, OSError) as e:
            logger.warning(f"Could not start progress spinner: {e}")
            return
        self._running = True

    def stop(self, *, succeeded: bool = True) -> None:
        """Stop the animation and print the final message on success."""
        if self._running:
            try:
                self._status.stop()
            except OSError as e:
                logger.warning(f"Could not stop progress spinner: {e}")
            self._running = False
        if succeeded and self.final_message:
            self.console.print(self.final_message, markup=False, highlight=False)

    def __enter__(self) -> ProgressReporter:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop(succeeded=exc_type is None)

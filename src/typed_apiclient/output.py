"""Diagnostics output on stderr.

The client never writes to stdout and, with the default manager, writes
nothing at all: per-attempt traces go through :meth:`OutputManager.debug`,
which only prints when the manager is ``verbose``. Applications that want to
see what the client is doing install a verbose manager once::

    from typed_apiclient.output import OutputManager, set_output

    set_output(OutputManager(verbose=True))

Colour is disabled when ``NO_COLOR`` is set, ``TERM=dumb``, or
``no_color=True`` is passed.
"""

from __future__ import annotations

import os
import sys
from typing import Optional

from rich.console import Console
from rich.markup import escape


class OutputManager:
    """Routes diagnostic messages to a Rich stderr console.

    Args:
        no_color: Disable all colour and Rich markup.
        verbose: Enable debug-level messages.
    """

    def __init__(
        self,
        no_color: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._verbose = verbose

        self._stderr = Console(
            file=sys.stderr,
            no_color=self._no_color,
            stderr=True,
        )

    @property
    def is_verbose(self) -> bool:
        """Whether verbose mode is enabled."""
        return self._verbose

    def debug(self, message: str) -> None:
        """Print a debug message to stderr. Only shown when verbose.

        Args:
            message: The debug text (prefixed with ``[debug]`` on output).
        """
        if self._verbose:
            if self._no_color:
                print(f"[debug] {message}", file=sys.stderr, flush=True)
            else:
                self._stderr.print(f"[dim]{escape(f'[debug] {message}')}[/dim]")


def _should_disable_color() -> bool:
    """Return True when ``NO_COLOR`` is set (any value) or ``TERM=dumb``."""
    if os.environ.get("NO_COLOR") is not None:
        return True
    if os.environ.get("TERM") == "dumb":
        return True
    return False


# ------------------------------------------------------------------ #
# Global output instance
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the global :class:`OutputManager`, creating a silent default lazily."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    """Install *output* as the global :class:`OutputManager`."""
    global _output
    _output = output


def reset_output() -> None:
    """Reset the global :class:`OutputManager` to ``None``.

    Primarily useful in test suites to ensure a clean state between tests.
    """
    global _output
    _output = None

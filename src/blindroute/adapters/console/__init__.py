"""Console adapters."""

from blindroute.adapters.console.console_announcer import ConsoleAnnouncer
from blindroute.adapters.console.console_input import ConsoleInput

__all__ = ["ConsoleAnnouncer", "ConsoleInput"]

"""User-facing notices.

Sweeps and settings changes report to the user through a Notifier. The
console implementation prints with Rich; in quiet mode notices go to the
log instead.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum

from sweepctl.utils.formatting import print_info, print_warning

logger = logging.getLogger(__name__)


class NoticeLevel(str, Enum):
    """Severity of a notice.

    Attributes:
        INFO: Status information (scheduler state, deleted files).
        WARNING: Something needs the user's attention.
    """

    INFO = "info"
    WARNING = "warning"


class Notifier(ABC):
    """Abstract sink for transient user-facing notices."""

    @abstractmethod
    def notify(self, message: str, level: NoticeLevel = NoticeLevel.INFO) -> None:
        """Show a notice to the user.

        Args:
            message: Notice text, may span several lines.
            level: Severity of the notice.
        """


class ConsoleNotifier(Notifier):
    """Prints notices to the terminal.

    Printed notices are logged at DEBUG only, so they show up once on the
    console. With `quiet` nothing is printed and notices are logged at
    their own level instead.

    Args:
        quiet: If True, only log notices and print nothing.
    """

    def __init__(self, quiet: bool = False) -> None:
        self._quiet = quiet

    def notify(self, message: str, level: NoticeLevel = NoticeLevel.INFO) -> None:
        if self._quiet:
            log_level = logging.WARNING if level == NoticeLevel.WARNING else logging.INFO
            logger.log(log_level, "%s", message)
            return

        logger.debug("Notice (%s): %s", level.value, message)
        if level == NoticeLevel.WARNING:
            print_warning(message)
        else:
            print_info(message)

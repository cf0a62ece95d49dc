import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)

INFO = "info"
SUCCESS = "success"
ERROR = "error"


class Notifier(ABC):
    @abstractmethod
    def notify(self, message: str, level: str = INFO) -> None:
        pass


class LoggingNotifier(Notifier):
    """Default notifier: writes user-facing messages to the log."""

    def notify(self, message: str, level: str = INFO) -> None:
        if level == ERROR:
            logger.error(message)
        else:
            logger.info(message)

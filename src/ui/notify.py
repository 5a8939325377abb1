import logging
import subprocess

from core.state import Notify

logger = logging.getLogger(__name__)


class DesktopNotifier:
    """Shows a Notify through notify-send. Cosmetic only: failures are logged and dropped."""

    def __init__(self, timeout_ms: int = 3000, command: str = "notify-send"):
        self.timeout_ms = timeout_ms
        self.command = command

    def show(self, note: Notify) -> None:
        args = [self.command, "-t", str(self.timeout_ms)]
        if note.notify_type == "error":
            args += ["-u", "critical"]
        args += [note.summary, note.message]
        try:
            subprocess.run(args, capture_output=True, check=False)
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug("Notification failed: %s", e)

from __future__ import annotations
from dataclasses import dataclass
from PySide6.QtCore import QObject, Signal, Slot

@dataclass(frozen=True)
class Notify:
    summary: str
    message: str
    notify_type: str = "info"   # info/warn/error

class AppState(QObject):
    notification = Signal(object)   # emits Notify

    def __init__(self, config=None):
        super().__init__()
        self.config = config
        self.client = None
        self.picker = None
        self.playback = None

    @Slot(str, str)
    def notify(self, summary: str, message: str, notify_type: str = "info"):
        self.notification.emit(Notify(summary=summary, message=message, notify_type=notify_type))

from __future__ import annotations

from typing import Sequence

from PySide6.QtCore import Qt
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QApplication, QDialog, QVBoxLayout, QHBoxLayout, QLabel,
    QTreeWidget, QTreeWidgetItem, QPushButton, QHeaderView
)

from core.models import PickMode, SelectionResult


class PickerDialog(QDialog):
    def __init__(self, items: Sequence[str], prompt: str, selected_row: int = 0, columns: bool = False, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Music Selection")
        self.resize(720, 480)
        self._chosen = SelectionResult.cancel()

        layout = QVBoxLayout(self)
        layout.addWidget(QLabel(prompt))

        rows = [item.split("\t") if columns else [item] for item in items]
        width = max((len(r) for r in rows), default=1)

        self.tree = QTreeWidget()
        self.tree.setColumnCount(width)
        self.tree.setHeaderHidden(True)
        self.tree.setRootIsDecorated(False)
        self.tree.setAlternatingRowColors(True)
        self.tree.header().setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
        for row in rows:
            self.tree.addTopLevelItem(QTreeWidgetItem(row))
        layout.addWidget(self.tree)

        btn_layout = QHBoxLayout()
        self.play_btn = QPushButton("Play")
        self.queue_btn = QPushButton("Queue")
        self.play_btn.setDefault(True)
        btn_layout.addWidget(self.play_btn)
        btn_layout.addWidget(self.queue_btn)
        layout.addLayout(btn_layout)

        if 0 <= selected_row < self.tree.topLevelItemCount():
            self.tree.setCurrentItem(self.tree.topLevelItem(selected_row))

        # connect
        self.play_btn.clicked.connect(lambda: self._finish(PickMode.ACCEPT))
        self.queue_btn.clicked.connect(lambda: self._finish(PickMode.ALTERNATE))
        self.tree.itemActivated.connect(lambda *_: self._finish(PickMode.ACCEPT))
        self.queue_shortcut = QShortcut(QKeySequence("Ctrl+Return"), self)
        self.queue_shortcut.activated.connect(lambda: self._finish(PickMode.ALTERNATE))

    def current_row(self) -> int | None:
        item = self.tree.currentItem()
        if item is None:
            return None
        return self.tree.indexOfTopLevelItem(item)

    def _finish(self, mode: PickMode):
        row = self.current_row()
        if row is None:
            return
        self._chosen = SelectionResult(index=row, mode=mode)
        self.accept()

    def selection(self) -> SelectionResult:
        """What the user picked; a closed or rejected dialog is a cancel."""
        return self._chosen


class QtPicker:
    """In-process alternative to rofi; same contract as RofiPicker.pick."""

    def pick(self, items: Sequence[str], prompt: str, selected_row: int = 0, columns: bool = False) -> SelectionResult:
        if not items:
            return SelectionResult.cancel()

        app = QApplication.instance() or QApplication([])
        dialog = PickerDialog(items, prompt, selected_row, columns)
        dialog.setWindowFlag(Qt.WindowType.WindowStaysOnTopHint, True)
        dialog.exec()
        result = dialog.selection()
        dialog.deleteLater()
        app.processEvents()
        return result

# morse_app/widgets/toast.py
from PyQt5.QtWidgets import QLabel
from PyQt5.QtCore import Qt, QTimer

COLORS = dict(
    info    =("#2d3339", "#e8e8e8"),
    success =("#1f5130", "#e8ffe8"),
    error   =("#6b1f24", "#ffe8e8"),
)


class Toast(QLabel):
    """Short-lived notification strip; a new message replaces the current one."""
    def __init__(self, parent=None, duration_ms: int = 2500):
        super().__init__(parent)
        self.duration_ms = int(duration_ms)
        self.setAlignment(Qt.AlignCenter)
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self.hide)
        self.hide()

    def show_message(self, text: str, kind: str = "info"):
        bg, fg = COLORS.get(kind, COLORS["info"])
        self.setStyleSheet(f"background:{bg}; color:{fg}; border-radius:8px; padding:6px; font: 13px;")
        self.setText(text)
        self.show(); self.raise_()
        self._timer.start(self.duration_ms)

    def info(self, text: str): self.show_message(text, "info")
    def success(self, text: str): self.show_message(text, "success")
    def error(self, text: str): self.show_message(text, "error")

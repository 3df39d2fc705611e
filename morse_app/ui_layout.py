# morse_app/ui_layout.py
from PyQt5.QtWidgets import QWidget, QLabel, QPlainTextEdit, QPushButton
from PyQt5.QtCore import Qt

from morse_app.converter import TITLE, MODE_LABELS, PLACEHOLDERS, OUTPUT_PLACEHOLDER, ENCODE
from morse_app.widgets.toast import Toast

WINDOW_SIZE = (760, 470)

COORDS = dict(
    title      =( 24,  18, 420, 36),
    mode_label =(470,  24, 200, 24),
    btn_mode   =(680,  18,  56, 36),
    input_box  =( 24,  70, 712, 130),
    btn_mic    =(676, 154,  52, 38),
    output_box =( 24, 216, 712, 130),
    btn_clear  =( 24, 368, 110, 40),
    btn_copy   =(146, 368, 110, 40),
    btn_play   =(586, 368, 150, 40),
    toast      =(180, 420, 400, 34),
)

BOX_STYLE = "background:#fff; color:#111; border-radius:6px; padding:6px; font: 15px 'Consolas';"
OUT_STYLE = "background:#eef0f3; color:#111; border-radius:6px; padding:6px; font: 15px 'Consolas';"
BTN_STYLE = "background:#3a3f44; color:#fff; border-radius:6px; padding:6px;"


def _button(parent, key, text, tip=""):
    b = QPushButton(text, parent)
    b.setGeometry(*COORDS[key])
    b.setCursor(Qt.PointingHandCursor)
    b.setStyleSheet(BTN_STYLE)
    if tip:
        b.setToolTip(tip)
    return b


def build_ui(parent: QWidget):
    """Creates the converter widgets and returns (widgets, coords)."""
    widgets = {}
    parent.setStyleSheet("background:#1c1f22;")

    widgets["title"] = QLabel(TITLE, parent)
    widgets["title"].setGeometry(*COORDS["title"])
    widgets["title"].setStyleSheet("color:#e8e8e8; font: bold 22px;")

    widgets["mode_label"] = QLabel(MODE_LABELS[ENCODE], parent)
    widgets["mode_label"].setGeometry(*COORDS["mode_label"])
    widgets["mode_label"].setAlignment(Qt.AlignRight | Qt.AlignVCenter)
    widgets["mode_label"].setStyleSheet("color:#9aa0a6; font: 13px;")

    widgets["btn_mode"] = _button(parent, "btn_mode", "⇅", "Switch encode / decode")

    # Input + mic overlay (encode mode only)
    widgets["input_box"] = QPlainTextEdit(parent)
    widgets["input_box"].setGeometry(*COORDS["input_box"])
    widgets["input_box"].setPlaceholderText(PLACEHOLDERS[ENCODE])
    widgets["input_box"].setStyleSheet(BOX_STYLE)

    widgets["btn_mic"] = _button(parent, "btn_mic", "Mic", "Start voice typing")
    widgets["btn_mic"].raise_()

    widgets["output_box"] = QPlainTextEdit(parent)
    widgets["output_box"].setGeometry(*COORDS["output_box"])
    widgets["output_box"].setReadOnly(True)
    widgets["output_box"].setPlaceholderText(OUTPUT_PLACEHOLDER)
    widgets["output_box"].setStyleSheet(OUT_STYLE)

    widgets["btn_clear"] = _button(parent, "btn_clear", "Clear")
    widgets["btn_copy"]  = _button(parent, "btn_copy", "Copy")
    widgets["btn_play"]  = _button(parent, "btn_play", "Play Sound")

    widgets["toast"] = Toast(parent)
    widgets["toast"].setGeometry(*COORDS["toast"])

    return widgets, COORDS

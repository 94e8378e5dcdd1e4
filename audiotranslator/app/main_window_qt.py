from __future__ import annotations

from typing import Sequence

from PyQt6 import QtCore, QtWidgets

from audiotranslator.nlp.languages import Language
from audiotranslator.ui.sink import DisplayState


class MainWindow(QtWidgets.QMainWindow):
    mic_toggle_requested = QtCore.pyqtSignal()
    source_selected = QtCore.pyqtSignal(str)
    target_selected = QtCore.pyqtSignal(str)

    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("Audio Translator")
        self.resize(680, 560)
        self._recording = False

        root = QtWidgets.QWidget(self)
        self.setCentralWidget(root)
        lay = QtWidgets.QVBoxLayout(root)
        lay.setContentsMargins(22, 20, 22, 20)
        lay.setSpacing(14)

        title = QtWidgets.QLabel("Audio Translator", root)
        title.setObjectName("title")
        lay.addWidget(title)

        lang_row = QtWidgets.QHBoxLayout()
        lang_row.setSpacing(10)
        self.source_combo = QtWidgets.QComboBox(root)
        self.target_combo = QtWidgets.QComboBox(root)
        for lang in Language:
            self.source_combo.addItem(lang.label, lang.value)
        arrow = QtWidgets.QLabel("→", root)
        arrow.setObjectName("arrow")
        lang_row.addStretch(1)
        lang_row.addWidget(self.source_combo)
        lang_row.addWidget(arrow)
        lang_row.addWidget(self.target_combo)
        lang_row.addStretch(1)
        lay.addLayout(lang_row)

        self.btn_mic = QtWidgets.QPushButton("\U0001F3A4", root)
        self.btn_mic.setObjectName("mic")
        self.btn_mic.setFixedSize(80, 80)
        lay.addWidget(self.btn_mic, 0, QtCore.Qt.AlignmentFlag.AlignHCenter)

        self.meter = QtWidgets.QProgressBar(root)
        self.meter.setRange(0, 100)
        self.meter.setValue(0)
        self.meter.setTextVisible(False)
        lay.addWidget(self.meter)

        self.error_label = QtWidgets.QLabel("", root)
        self.error_label.setObjectName("error")
        self.error_label.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)
        self.error_label.hide()
        lay.addWidget(self.error_label)

        original_title = QtWidgets.QLabel("Original Text:", root)
        original_title.setObjectName("subhead")
        self.original_text = QtWidgets.QPlainTextEdit(root)
        self.original_text.setReadOnly(True)
        self.original_text.setPlaceholderText("Your speech will appear here...")
        translated_title = QtWidgets.QLabel("Translated Text:", root)
        translated_title.setObjectName("subhead")
        self.translated_text = QtWidgets.QPlainTextEdit(root)
        self.translated_text.setReadOnly(True)
        self.translated_text.setPlaceholderText("Translation will appear here...")
        lay.addWidget(original_title)
        lay.addWidget(self.original_text)
        lay.addWidget(translated_title)
        lay.addWidget(self.translated_text)

        self.status_label = QtWidgets.QLabel("", root)
        self.status_label.setObjectName("status")
        self.status_label.setWordWrap(True)
        lay.addWidget(self.status_label)

        self.btn_mic.clicked.connect(self.mic_toggle_requested.emit)
        self.source_combo.currentIndexChanged.connect(self._on_source_index)
        self.target_combo.currentIndexChanged.connect(self._on_target_index)

        self.setStyleSheet(
            """
            QMainWindow { background: #121416; color: #e8ecef; }
            QLabel#title { font-size: 26px; font-weight: 700; }
            QLabel#arrow { color: #6ec7ff; font-size: 20px; }
            QLabel#subhead { color: #b8c1c8; font-size: 13px; font-weight: 600; }
            QLabel#status { color: #a7b0b8; font-size: 12px; }
            QLabel#error { color: #ff6b6b; font-size: 13px; }
            QPushButton#mic {
                background: #000000;
                border-radius: 40px;
                color: #ffffff;
                font-size: 30px;
            }
            QPushButton#mic[recording="true"] { background: #4b5563; }
            QPlainTextEdit {
                background: #1a1e22;
                border: 1px solid #2a3138;
                border-radius: 10px;
                color: #e7edf3;
                min-height: 90px;
            }
            QProgressBar {
                background: #13181d;
                border: 1px solid #2f3740;
                border-radius: 6px;
                height: 10px;
            }
            QProgressBar::chunk { background: #6ec7ff; border-radius: 6px; }
            """
        )

    def _on_source_index(self, index: int) -> None:
        value = self.source_combo.itemData(index)
        if value:
            self.source_selected.emit(str(value))

    def _on_target_index(self, index: int) -> None:
        value = self.target_combo.itemData(index)
        if value:
            self.target_selected.emit(str(value))

    def set_languages(self, source: Language, target: Language, target_choices: Sequence[Language]) -> None:
        for combo in (self.source_combo, self.target_combo):
            combo.blockSignals(True)
        try:
            self.source_combo.setCurrentIndex(self.source_combo.findData(source.value))
            self.target_combo.clear()
            for lang in target_choices:
                self.target_combo.addItem(lang.label, lang.value)
            self.target_combo.setCurrentIndex(self.target_combo.findData(target.value))
        finally:
            for combo in (self.source_combo, self.target_combo):
                combo.blockSignals(False)

    def set_recording(self, recording: bool) -> None:
        self._recording = recording
        self.btn_mic.setProperty("recording", "true" if recording else "false")
        self.btn_mic.setToolTip("Stop recording" if recording else "Start recording")
        self.btn_mic.style().unpolish(self.btn_mic)
        self.btn_mic.style().polish(self.btn_mic)
        if not recording:
            self.set_meter_level(0)

    def show_display(self, state: DisplayState) -> None:
        if self.original_text.toPlainText() != state.original_text:
            self.original_text.setPlainText(state.original_text)
        if self.translated_text.toPlainText() != state.translated_text:
            self.translated_text.setPlainText(state.translated_text)
        self.error_label.setText(state.error_message)
        self.error_label.setVisible(bool(state.error_message))

    def set_meter_level(self, level_0_to_100: int) -> None:
        self.meter.setValue(max(0, min(100, int(level_0_to_100))))

    def set_status_text(self, text: str) -> None:
        self.status_label.setText(text)

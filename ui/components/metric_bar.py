"""Labelled percentage bar for accuracy and confidence metrics."""

from PyQt6.QtWidgets import QHBoxLayout, QLabel, QProgressBar, QVBoxLayout, QWidget

from core.utils import format_percent


class MetricBar(QWidget):
    """Shows a 0-100 value as text with two decimals and as a bar."""

    def __init__(self, label: str, parent=None):
        super().__init__(parent)
        self._value = 0.0

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

        header = QHBoxLayout()
        self._name_label = QLabel(label)
        self._name_label.setProperty("class", "metricLabel")
        self._value_label = QLabel(format_percent(0.0))
        self._value_label.setProperty("class", "metricValue")
        header.addWidget(self._name_label)
        header.addStretch()
        header.addWidget(self._value_label)

        # Hundredths so fractional percentages still move the bar
        self._bar = QProgressBar()
        self._bar.setRange(0, 10000)
        self._bar.setTextVisible(False)
        self._bar.setFixedHeight(12)

        layout.addLayout(header)
        layout.addWidget(self._bar)

    @property
    def value(self) -> float:
        return self._value

    def set_value(self, value: float):
        self._value = max(0.0, min(100.0, value))
        self._value_label.setText(format_percent(self._value))
        self._bar.setValue(int(round(self._value * 100)))

    def reset(self):
        self.set_value(0.0)

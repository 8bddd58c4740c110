"""Image drag-and-drop zone showing a preview of the staged X-ray."""

from pathlib import Path
from typing import Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QColor, QDragEnterEvent, QDropEvent, QPainter, QPen, QPixmap
from PyQt6.QtWidgets import (
    QFileDialog,
    QLabel,
    QVBoxLayout,
    QWidget,
)

from core.image_loader import SUPPORTED_IMAGE_EXTENSIONS, create_thumbnail
from core.utils import ImageRef, format_file_size
from i18n import t

PREVIEW_SIZE = (320, 200)


class ImageDropZone(QWidget):
    """Click or drop target that reports chosen files and previews an ImageRef.

    The zone does not own the image; callers push the staged ImageRef back
    with show_image() once it has been accepted.
    """

    file_chosen = pyqtSignal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._image: Optional[ImageRef] = None
        self._drag_over = False
        self._locked = False
        self.setAcceptDrops(True)
        self.setObjectName("imageDropZone")
        self.setMinimumHeight(220)
        self._setup_ui()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._icon_label = QLabel("⬆")
        self._icon_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._icon_label.setProperty("class", "dropZoneIcon")

        self._text_label = QLabel(t("upload.drop_text"))
        self._text_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._text_label.setWordWrap(True)
        self._text_label.setProperty("class", "dropZoneText")

        self._preview_label = QLabel()
        self._preview_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._preview_label.setFixedHeight(200)
        self._preview_label.hide()

        self._file_info_label = QLabel()
        self._file_info_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._file_info_label.setProperty("class", "dropZoneFileInfo")
        self._file_info_label.hide()

        layout.addWidget(self._icon_label)
        layout.addWidget(self._text_label)
        layout.addWidget(self._preview_label)
        layout.addWidget(self._file_info_label)

    @staticmethod
    def _is_supported(file_path: str) -> bool:
        return Path(file_path).suffix.lower() in SUPPORTED_IMAGE_EXTENSIONS

    def set_locked(self, locked: bool):
        """Ignore clicks and drops, e.g. while an analysis is running."""
        self._locked = locked
        self.setAcceptDrops(not locked)

    def show_image(self, image: Optional[ImageRef]):
        """Render the given image, or the placeholder when None."""
        if image is self._image:
            return
        self._image = image
        if image is None:
            self._preview_label.clear()
            self._preview_label.hide()
            self._file_info_label.hide()
            self._icon_label.show()
            self._text_label.show()
            self.update()
            return

        pixmap = QPixmap()
        try:
            loaded = pixmap.loadFromData(create_thumbnail(image, size=PREVIEW_SIZE))
        except (OSError, ValueError):
            loaded = False
        if loaded:
            self._preview_label.setPixmap(pixmap)
        else:
            self._preview_label.setText(image.file_name)
        self._preview_label.show()

        info = f"{image.file_name} ({format_file_size(image.size_bytes)})"
        self._file_info_label.setText(f"{info}\n{t('upload.change_image')}")
        self._file_info_label.show()
        self._icon_label.hide()
        self._text_label.hide()
        self.update()

    def _browse_file(self):
        ext_filter = " ".join(f"*{e}" for e in SUPPORTED_IMAGE_EXTENSIONS)
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            t("upload.browse_title"),
            "",
            f"Images ({ext_filter})",
        )
        if file_path:
            self.file_chosen.emit(file_path)

    # --- Drag and drop ---

    def dragEnterEvent(self, event: QDragEnterEvent):
        if self._locked or not event.mimeData().hasUrls():
            return
        urls = event.mimeData().urls()
        if urls and self._is_supported(urls[0].toLocalFile()):
            event.acceptProposedAction()
            self._drag_over = True
            self.update()

    def dragLeaveEvent(self, event):
        self._drag_over = False
        self.update()

    def dropEvent(self, event: QDropEvent):
        self._drag_over = False
        urls = event.mimeData().urls()
        if urls and not self._locked:
            file_path = urls[0].toLocalFile()
            if self._is_supported(file_path):
                self.file_chosen.emit(file_path)
        self.update()

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton and not self._locked:
            self._browse_file()

    def border_pen(self) -> QPen:
        """Dashed while empty or dragged over, solid once an image is staged."""
        if self._drag_over:
            pen = QPen(QColor("#A855F7"), 2, Qt.PenStyle.DashLine)
            pen.setDashPattern([8, 4])
        elif self._image is not None:
            pen = QPen(QColor("#22C55E"), 2, Qt.PenStyle.SolidLine)
        else:
            pen = QPen(QColor("#D8B4FE"), 2, Qt.PenStyle.DashLine)
            pen.setDashPattern([8, 4])
        return pen

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setPen(self.border_pen())
        painter.drawRoundedRect(self.rect().adjusted(1, 1, -1, -1), 12, 12)
        painter.end()

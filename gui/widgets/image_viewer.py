"""Image viewer with zoom, drop-to-load and drag-to-select crop."""

from PySide6.QtWidgets import QGraphicsView, QGraphicsScene, QGraphicsRectItem
from PySide6.QtGui import (
    QPixmap, QImage, QPen, QColor, QBrush, QWheelEvent, QMouseEvent,
    QDragEnterEvent, QDropEvent, QDragMoveEvent, QPainter, QFont
)
from PySide6.QtCore import Qt, Signal, QRectF, QPointF

from models.crop_rect import DisplaySelection
from models.pixel_buffer import PixelBuffer

IMAGE_EXTENSIONS = ('.png', '.jpg', '.jpeg', '.bmp', '.tiff', '.webp')


def buffer_to_qimage(buffer: PixelBuffer) -> QImage:
    """Deep-copied QImage of an RGBA buffer."""
    qimage = QImage(
        buffer.pixels.data, buffer.width, buffer.height,
        4 * buffer.width, QImage.Format.Format_RGBA8888
    )
    return qimage.copy()


class ImageViewer(QGraphicsView):
    """
    QGraphicsView showing one PixelBuffer.

    In crop mode a left-button drag draws a selection; on release
    ``selectionMade`` carries it in viewport pixels together with the size
    the image currently occupies on screen.
    """

    selectionMade = Signal(object, object)
    imageDropped = Signal(str)

    def __init__(self, parent=None):
        super().__init__(parent)

        self._scene = QGraphicsScene(self)
        self.setScene(self._scene)

        self._pixmap_item = None
        self._buffer = None
        self._selection_item = None
        self._drag_start = None
        self._crop_mode = False

        self.setTransformationAnchor(QGraphicsView.ViewportAnchor.AnchorUnderMouse)
        self.setResizeAnchor(QGraphicsView.ViewportAnchor.AnchorViewCenter)
        self.setBackgroundBrush(QColor(40, 40, 40))
        self.setMinimumSize(300, 300)
        self.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)

        self.setAcceptDrops(True)
        self.viewport().setAcceptDrops(True)

        self._zoom_factor = 1.0
        self._min_zoom = 0.05
        self._max_zoom = 20.0

    def set_image(self, buffer: PixelBuffer, refit: bool = True):
        """Display an RGBA buffer; keep the zoom when ``refit`` is False."""
        self._buffer = buffer
        pixmap = QPixmap.fromImage(buffer_to_qimage(buffer))

        if self._pixmap_item is not None and not refit:
            self._pixmap_item.setPixmap(pixmap)
            return

        self._scene.clear()
        self._selection_item = None
        self._pixmap_item = self._scene.addPixmap(pixmap)
        self.setSceneRect(QRectF(pixmap.rect()))
        self.reset_view()

    def reset_view(self):
        if self._pixmap_item:
            self.fitInView(self._pixmap_item, Qt.AspectRatioMode.KeepAspectRatio)
            self._zoom_factor = self.transform().m11()

    def set_crop_mode(self, enabled: bool):
        self._crop_mode = enabled
        self._clear_selection()
        self.setCursor(Qt.CursorShape.CrossCursor if enabled else Qt.CursorShape.ArrowCursor)

    def is_crop_mode(self) -> bool:
        return self._crop_mode

    def displayed_image_rect(self) -> QRectF:
        """Viewport rectangle the image occupies at the current zoom."""
        if self._pixmap_item is None:
            return QRectF()
        return self.mapFromScene(self._pixmap_item.sceneBoundingRect()).boundingRect().toRectF()

    def _clear_selection(self):
        if self._selection_item is not None:
            self._scene.removeItem(self._selection_item)
            self._selection_item = None
        self._drag_start = None

    def _update_selection(self, start: QPointF, end: QPointF):
        rect = QRectF(self.mapToScene(start.toPoint()), self.mapToScene(end.toPoint())).normalized()
        if self._selection_item is None:
            pen = QPen(QColor(255, 255, 255))
            pen.setWidth(2)
            pen.setCosmetic(True)
            pen.setStyle(Qt.PenStyle.DashLine)
            self._selection_item = QGraphicsRectItem(rect)
            self._selection_item.setPen(pen)
            self._selection_item.setBrush(QBrush(QColor(20, 184, 166, 40)))
            self._scene.addItem(self._selection_item)
        else:
            self._selection_item.setRect(rect)

    def paintEvent(self, event):
        super().paintEvent(event)

        if self._pixmap_item is None:
            painter = QPainter(self.viewport())
            rect = self.viewport().rect()
            painter.setFont(QFont("Segoe UI", 11))
            painter.setPen(QColor(100, 100, 100))
            painter.drawText(rect, Qt.AlignmentFlag.AlignCenter,
                             "Upload an image to start editing\nCtrl+O • Demo menu • drop a file")
            painter.end()

    def wheelEvent(self, event: QWheelEvent):
        if self._buffer is None:
            event.ignore()
            return

        factor = 1.15 if event.angleDelta().y() > 0 else 1 / 1.15
        new_zoom = self._zoom_factor * factor

        if self._min_zoom <= new_zoom <= self._max_zoom:
            self._zoom_factor = new_zoom
            self.scale(factor, factor)
        event.accept()

    def mousePressEvent(self, event: QMouseEvent):
        if self._crop_mode and self._buffer is not None and event.button() == Qt.MouseButton.LeftButton:
            self._clear_selection()
            self._drag_start = event.position()
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent):
        if self._crop_mode and self._drag_start is not None:
            self._update_selection(self._drag_start, event.position())
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent):
        if self._crop_mode and self._drag_start is not None and event.button() == Qt.MouseButton.LeftButton:
            image_rect = self.displayed_image_rect()
            start, end = self._drag_start, event.position()
            self._drag_start = None

            # Selection relative to the image's on-screen top-left corner
            selection = DisplaySelection.from_drag(
                (start.x() - image_rect.x(), start.y() - image_rect.y()),
                (end.x() - image_rect.x(), end.y() - image_rect.y()),
            )
            self.selectionMade.emit(selection, (image_rect.width(), image_rect.height()))
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def _is_valid_image_drop(self, mime_data) -> str | None:
        if mime_data.hasUrls():
            urls = mime_data.urls()
            if urls:
                path = urls[0].toLocalFile()
                if path.lower().endswith(IMAGE_EXTENSIONS):
                    return path
        return None

    def dragEnterEvent(self, event: QDragEnterEvent):
        if self._is_valid_image_drop(event.mimeData()):
            event.setDropAction(Qt.DropAction.CopyAction)
            event.accept()
        else:
            event.ignore()

    def dragMoveEvent(self, event: QDragMoveEvent):
        if self._is_valid_image_drop(event.mimeData()):
            event.setDropAction(Qt.DropAction.CopyAction)
            event.accept()
        else:
            event.ignore()

    def dropEvent(self, event: QDropEvent):
        path = self._is_valid_image_drop(event.mimeData())
        if path:
            self.imageDropped.emit(path)
            event.setDropAction(Qt.DropAction.CopyAction)
            event.accept()
        else:
            event.ignore()

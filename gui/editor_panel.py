"""Editor panel - style, color sliders, geometry actions and preview."""

import logging
from pathlib import Path

from PySide6.QtWidgets import (
    QWidget, QHBoxLayout, QVBoxLayout, QFormLayout, QPushButton, QLabel,
    QSlider, QComboBox, QGroupBox, QSplitter, QFileDialog, QMessageBox
)
from PySide6.QtCore import Qt, QThread, QTimer, QSettings

from models.edit_settings import EditSettings, StyleId
from models.pixel_buffer import PixelBuffer
from models.render_result import RenderResult
from engines.rotate import RotationDirection
from engines.session import EditSession
from engines.style_presets import STYLE_LABELS
from gui.widgets.image_viewer import ImageViewer
from gui.worker import RenderWorker
from utils.constants import (
    BRIGHTNESS_RANGE, CONTRAST_RANGE, HUE_RANGE, RENDER_DEBOUNCE_MS, SATURATION_RANGE
)
from utils.errors import InvalidSelection
from utils.image_io import load_image, save_image

logger = logging.getLogger(__name__)

# (settings field, label, range, unit)
SLIDERS = [
    ('brightness', "Brightness", BRIGHTNESS_RANGE, ""),
    ('contrast', "Contrast", CONTRAST_RANGE, ""),
    ('saturation', "Saturation", SATURATION_RANGE, ""),
    ('hue', "Hue Rotate", HUE_RANGE, "°"),
]


class EditorPanel(QWidget):
    """
    Main editing interface.

    Layout:
    - Left: style selector, color sliders, actions
    - Right: preview / crop viewer
    """

    def __init__(self, parent=None):
        super().__init__(parent)

        # State
        self._session = None
        self._image_name = ""
        self._thread = None
        self._worker = None
        self._render_pending = False
        self._render_source = None
        self._settings = QSettings("CanvasEditor", "CanvasEditor")

        # Coalesces rapid slider changes into one render
        self._render_timer = QTimer(self)
        self._render_timer.setSingleShot(True)
        self._render_timer.setInterval(RENDER_DEBOUNCE_MS)
        self._render_timer.timeout.connect(self._on_run)

        self._init_ui()

    def _init_ui(self):
        main_layout = QHBoxLayout(self)
        main_layout.setContentsMargins(8, 8, 8, 8)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(self._create_control_panel())

        self._viewer = ImageViewer()
        self._viewer.imageDropped.connect(self.load_path)
        self._viewer.selectionMade.connect(self._on_selection_made)
        splitter.addWidget(self._viewer)

        splitter.setStretchFactor(0, 0)
        splitter.setStretchFactor(1, 1)
        splitter.setSizes([280, 800])
        main_layout.addWidget(splitter)

    def _create_control_panel(self) -> QWidget:
        panel = QWidget()
        panel.setMinimumWidth(240)
        panel.setMaximumWidth(320)
        layout = QVBoxLayout(panel)
        layout.setContentsMargins(0, 0, 8, 0)
        layout.setSpacing(6)

        # === Image ===
        image_group = QGroupBox("Image")
        image_layout = QVBoxLayout(image_group)

        self._load_btn = QPushButton("Load Image")
        self._load_btn.clicked.connect(self._on_load_image)
        image_layout.addWidget(self._load_btn)

        self._image_info_label = QLabel("No image loaded")
        self._image_info_label.setWordWrap(True)
        self._image_info_label.setStyleSheet("color: #888; font-size: 11px;")
        image_layout.addWidget(self._image_info_label)
        layout.addWidget(image_group)

        # === Style ===
        style_group = QGroupBox("Filter Style")
        style_layout = QVBoxLayout(style_group)
        self._style_combo = QComboBox()
        self._style_combo.addItems(STYLE_LABELS)
        self._style_combo.currentTextChanged.connect(self._on_settings_changed)
        style_layout.addWidget(self._style_combo)
        layout.addWidget(style_group)

        # === Color Adjustments ===
        color_group = QGroupBox("Color Adjustments")
        color_layout = QFormLayout(color_group)
        color_layout.setRowWrapPolicy(QFormLayout.RowWrapPolicy.WrapLongRows)
        self._sliders = {}
        self._slider_labels = {}

        for field, label, (low, high), unit in SLIDERS:
            row = QWidget()
            row_layout = QHBoxLayout(row)
            row_layout.setContentsMargins(0, 0, 0, 0)

            slider = QSlider(Qt.Orientation.Horizontal)
            slider.setRange(low, high)
            slider.setValue(0)
            value_label = QLabel(f"0{unit}")
            value_label.setMinimumWidth(36)

            slider.valueChanged.connect(
                lambda value, lbl=value_label, u=unit: lbl.setText(f"{value}{u}")
            )
            slider.valueChanged.connect(self._on_settings_changed)

            row_layout.addWidget(slider)
            row_layout.addWidget(value_label)
            color_layout.addRow(f"{label}:", row)
            self._sliders[field] = slider
            self._slider_labels[field] = value_label

        layout.addWidget(color_group)

        # === Actions ===
        actions_group = QGroupBox("Actions")
        actions_layout = QVBoxLayout(actions_group)

        rotate_row = QWidget()
        rotate_layout = QHBoxLayout(rotate_row)
        rotate_layout.setContentsMargins(0, 0, 0, 0)
        self._rotate_left_btn = QPushButton("⟲ Left 90°")
        self._rotate_left_btn.clicked.connect(lambda: self.rotate(RotationDirection.COUNTER_CLOCKWISE))
        self._rotate_right_btn = QPushButton("⟳ Right 90°")
        self._rotate_right_btn.clicked.connect(lambda: self.rotate(RotationDirection.CLOCKWISE))
        rotate_layout.addWidget(self._rotate_left_btn)
        rotate_layout.addWidget(self._rotate_right_btn)
        actions_layout.addWidget(rotate_row)

        self._crop_btn = QPushButton("Crop")
        self._crop_btn.setCheckable(True)
        self._crop_btn.setToolTip("Drag on the image to select the area to keep")
        self._crop_btn.toggled.connect(self._on_crop_toggled)
        actions_layout.addWidget(self._crop_btn)

        self._reset_btn = QPushButton("Reset All")
        self._reset_btn.setStyleSheet("QPushButton { color: #e88; }")
        self._reset_btn.clicked.connect(self.reset_all)
        actions_layout.addWidget(self._reset_btn)

        self._export_btn = QPushButton("Download Result")
        self._export_btn.setStyleSheet("""
            QPushButton {
                background: qlineargradient(x1:0, y1:0, x2:0, y2:1,
                    stop:0 #14b8a6, stop:1 #0d9488);
                border: 1px solid #2dd4bf;
                border-radius: 6px;
                font-weight: bold;
                padding: 10px 16px;
                color: white;
            }
            QPushButton:disabled { background: #2a2a2a; color: #555; border-color: #383838; }
        """)
        self._export_btn.clicked.connect(self._on_export)
        actions_layout.addWidget(self._export_btn)

        layout.addWidget(actions_group)

        self._status_label = QLabel("")
        self._status_label.setStyleSheet("color: #888;")
        layout.addWidget(self._status_label)

        layout.addStretch()
        self._update_enabled()
        return panel

    # ------------------------------------------------------------------ state

    def _current_settings(self) -> EditSettings:
        return EditSettings(
            style=StyleId.from_label(self._style_combo.currentText()),
            brightness=self._sliders['brightness'].value(),
            contrast=self._sliders['contrast'].value(),
            saturation=self._sliders['saturation'].value(),
            hue=self._sliders['hue'].value(),
        )

    def _apply_settings_to_controls(self, settings: EditSettings):
        for widget in [self._style_combo, *self._sliders.values()]:
            widget.blockSignals(True)
        self._style_combo.setCurrentText(settings.style.value)
        for field, slider in self._sliders.items():
            value = getattr(settings, field)
            slider.setValue(value)
            unit = "°" if field == 'hue' else ""
            self._slider_labels[field].setText(f"{value}{unit}")
        for widget in [self._style_combo, *self._sliders.values()]:
            widget.blockSignals(False)

    def _update_enabled(self):
        has_image = self._session is not None
        for widget in (self._rotate_left_btn, self._rotate_right_btn, self._crop_btn,
                       self._reset_btn, self._export_btn):
            widget.setEnabled(has_image)

    # ------------------------------------------------------------------ loading

    def _on_load_image(self):
        last_folder = self._settings.value("last_open_folder", "")
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Open Image",
            last_folder,
            "Images (*.png *.jpg *.jpeg *.bmp *.tiff *.webp);;All Files (*)"
        )
        if file_path:
            self._settings.setValue("last_open_folder", str(Path(file_path).parent))
            self.load_path(file_path)

    def load_path(self, file_path: str):
        try:
            image = load_image(file_path)
        except Exception as e:
            logger.error("Failed to load %s: %s", file_path, e)
            QMessageBox.critical(self, "Error", f"Failed to load image:\n{e}")
            return
        self.set_image(image, Path(file_path).name)

    def set_image(self, image: PixelBuffer, name: str):
        """Start a new session on ``image`` with default settings."""
        self._session = EditSession(image)
        self._image_name = name
        self._crop_btn.setChecked(False)
        self._apply_settings_to_controls(self._session.settings)
        self._image_info_label.setText(f"{name}\n{image.width} × {image.height}")
        self._viewer.set_image(image)
        self._update_enabled()
        self._update_statusbar(f"Loaded: {name} ({image.width}x{image.height})")
        self._schedule_render()

    # ------------------------------------------------------------------ editing

    def _on_settings_changed(self, *_):
        if self._session is None:
            return
        try:
            settings = self._current_settings()
        except ValueError as e:
            self._status_label.setText(str(e))
            return
        self._session.set_settings(settings)
        self._schedule_render()

    def _schedule_render(self):
        self._render_timer.start()

    def rotate(self, direction: int):
        if self._session is None:
            return
        current = self._session.rotate(direction)
        self._viewer.set_image(current)
        self._update_dimensions_label()
        self._schedule_render()

    def _on_crop_toggled(self, checked: bool):
        if self._session is None:
            return
        self._viewer.set_crop_mode(checked)
        if checked:
            # Selection is drawn over the un-styled current image
            self._viewer.set_image(self._session.current)
            self._status_label.setText("Click and drag to select area.")
        else:
            self._schedule_render()

    def _on_selection_made(self, selection, displayed_size):
        if self._session is None:
            return
        try:
            cropped = self._session.crop(selection, displayed_size)
        except InvalidSelection as e:
            logger.warning("Crop ignored: %s", e)
            self._status_label.setText("Selection too small, drag a larger area.")
            return
        self._crop_btn.setChecked(False)
        self._viewer.set_image(cropped)
        self._update_dimensions_label()
        self._update_statusbar(f"Cropped to {cropped.width}x{cropped.height}")

    def reset_all(self):
        if self._session is None:
            return
        self._session.reset_all()
        self._crop_btn.setChecked(False)
        self._apply_settings_to_controls(self._session.settings)
        self._viewer.set_image(self._session.current)
        self._update_dimensions_label()
        self._schedule_render()

    def _update_dimensions_label(self):
        if self._session is None:
            return
        current = self._session.current
        self._image_info_label.setText(f"{self._image_name}\n{current.width} × {current.height}")

    # ------------------------------------------------------------------ rendering

    def _on_run(self):
        """Render current settings in the background."""
        if self._session is None or self._viewer.is_crop_mode():
            return
        if self._thread is not None:
            # Rerun once the in-flight render completes
            self._render_pending = True
            return

        self._render_source = self._session.current
        self._thread = QThread()
        self._worker = RenderWorker(self._render_source, self._session.settings)
        self._worker.moveToThread(self._thread)

        self._thread.started.connect(self._worker.run)
        self._worker.finished.connect(self._on_render_finished)
        self._worker.progress.connect(self._status_label.setText)
        self._worker.error.connect(self._on_render_error)
        self._worker.finished.connect(self._thread.quit)
        self._worker.error.connect(self._thread.quit)
        self._thread.finished.connect(self._cleanup_thread)

        self._thread.start()

    def _on_render_finished(self, result: RenderResult):
        if self._session is None:
            return
        # A render started before a rotate, crop or settings change is dropped;
        # the viewer keeps showing the buffer crop mode selects against
        if not self._session.accept_result(result, self._render_source) or self._viewer.is_crop_mode():
            return
        self._viewer.set_image(result.image, refit=False)
        self._status_label.setText(
            f"{result.settings.style.value} in {result.total_time_ms:.1f}ms"
        )

    def _on_render_error(self, error_msg: str):
        logger.error("Render failed: %s", error_msg)
        self._status_label.setText(f"Error: {error_msg}")
        QMessageBox.critical(self, "Render Error", error_msg)

    def _cleanup_thread(self):
        if self._thread:
            self._thread.deleteLater()
            self._thread = None
        if self._worker:
            self._worker.deleteLater()
            self._worker = None
        if self._render_pending:
            self._render_pending = False
            self._schedule_render()

    # ------------------------------------------------------------------ export

    def _on_export(self):
        if self._session is None:
            return

        last_folder = self._settings.value("last_export_folder", "")
        default_name = str(Path(last_folder) / EditSession.suggested_export_name())
        file_path, _ = QFileDialog.getSaveFileName(
            self, "Save Edited Image",
            default_name,
            "PNG (*.png);;JPEG (*.jpg);;All Files (*)"
        )
        if not file_path:
            return

        try:
            save_image(self._session.export_buffer(), file_path)
        except Exception as e:
            logger.error("Export to %s failed: %s", file_path, e)
            QMessageBox.critical(self, "Export Error", f"Failed to save:\n{e}")
            return
        self._settings.setValue("last_export_folder", str(Path(file_path).parent))
        self._status_label.setText(f"Saved: {Path(file_path).name}")
        self._update_statusbar(f"Exported: {file_path}")

    def _update_statusbar(self, message: str):
        """Update main window status bar if available."""
        main_window = self.window()
        if hasattr(main_window, 'statusBar'):
            main_window.statusBar().showMessage(message)

"""Main application window."""

from PySide6.QtWidgets import QMainWindow, QStatusBar, QMessageBox
from PySide6.QtGui import QAction

from engines.rotate import RotationDirection
from gui.editor_panel import EditorPanel
from utils.demo_images import DEMO_IMAGES, generate_demo_image

# App metadata
APP_VERSION = "1.0"
APP_NAME = "Canvas Editor"


class MainWindow(QMainWindow):
    """Single-panel image editor window."""

    def __init__(self):
        super().__init__()

        self.setWindowTitle(f"{APP_NAME}: Client-Side Image Processing")
        self.setMinimumSize(1100, 720)

        self._editor = EditorPanel()
        self.setCentralWidget(self._editor)

        self._init_menu()
        self._init_statusbar()
        self._apply_dark_theme()

    def _init_menu(self):
        """Initialize menu bar."""
        menubar = self.menuBar()

        # File menu
        file_menu = menubar.addMenu("&File")

        load_action = QAction("&Load Image", self)
        load_action.setShortcut("Ctrl+O")
        load_action.triggered.connect(self._editor._on_load_image)
        file_menu.addAction(load_action)

        export_action = QAction("&Download Result", self)
        export_action.setShortcut("Ctrl+S")
        export_action.triggered.connect(self._editor._on_export)
        file_menu.addAction(export_action)

        file_menu.addSeparator()

        reset_action = QAction("&Reset All", self)
        reset_action.setShortcut("Ctrl+R")
        reset_action.triggered.connect(self._editor.reset_all)
        file_menu.addAction(reset_action)

        file_menu.addSeparator()

        exit_action = QAction("E&xit", self)
        exit_action.setShortcut("Ctrl+Q")
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        # Image menu
        image_menu = menubar.addMenu("&Image")

        rotate_left = QAction("Rotate &Left 90°", self)
        rotate_left.setShortcut("Ctrl+[")
        rotate_left.triggered.connect(lambda: self._editor.rotate(RotationDirection.COUNTER_CLOCKWISE))
        image_menu.addAction(rotate_left)

        rotate_right = QAction("Rotate &Right 90°", self)
        rotate_right.setShortcut("Ctrl+]")
        rotate_right.triggered.connect(lambda: self._editor.rotate(RotationDirection.CLOCKWISE))
        image_menu.addAction(rotate_right)

        crop_action = QAction("&Crop", self)
        crop_action.setShortcut("C")
        crop_action.triggered.connect(lambda: self._editor._crop_btn.toggle())
        image_menu.addAction(crop_action)

        # Demo menu
        demo_menu = menubar.addMenu("&Demo")
        demo_submenu = demo_menu.addMenu("Load Demo Image")

        for key, (label, _) in DEMO_IMAGES.items():
            action = QAction(label, self)
            action.triggered.connect(lambda checked, k=key: self._load_demo_image(k))
            demo_submenu.addAction(action)

        # Help menu
        help_menu = menubar.addMenu("&Help")
        about_action = QAction("&About", self)
        about_action.triggered.connect(self._show_about)
        help_menu.addAction(about_action)

    def _init_statusbar(self):
        """Initialize status bar."""
        self._statusbar = QStatusBar()
        self.setStatusBar(self._statusbar)
        self._statusbar.showMessage("Ready. Load an image to begin.")

    def _load_demo_image(self, key: str):
        image = generate_demo_image(key)
        if image is not None:
            self._editor.set_image(image, DEMO_IMAGES[key][0])

    def _show_about(self):
        QMessageBox.about(
            self, f"About {APP_NAME}",
            f"<b>{APP_NAME}</b> {APP_VERSION}<br>"
            "Color adjustments, style presets, crop and rotate.<br>"
            "All processing happens locally."
        )

    def _apply_dark_theme(self):
        """Apply dark theme stylesheet."""
        self.setStyleSheet("""
            QMainWindow {
                background-color: #1a1a1a;
            }
            QWidget {
                background-color: #242424;
                color: #e8e8e8;
                font-family: 'Segoe UI', 'SF Pro Display', 'Arial', sans-serif;
                font-size: 12px;
            }
            QGroupBox {
                font-weight: 600;
                border: 1px solid #3d3d3d;
                border-radius: 6px;
                margin-top: 14px;
                padding-top: 12px;
                background-color: #2a2a2a;
            }
            QGroupBox::title {
                subcontrol-origin: margin;
                left: 12px;
                padding: 0 6px;
                color: #999;
            }
            QPushButton {
                background: qlineargradient(x1:0, y1:0, x2:0, y2:1,
                    stop:0 #404040, stop:1 #353535);
                border: 1px solid #4a4a4a;
                border-radius: 5px;
                padding: 6px 12px;
                color: #e8e8e8;
            }
            QPushButton:hover {
                border-color: #5a5a5a;
            }
            QPushButton:checked {
                background: #0f766e;
                border-color: #14b8a6;
            }
            QPushButton:disabled {
                background: #2a2a2a;
                color: #555;
                border-color: #383838;
            }
            QSlider::groove:horizontal {
                height: 6px;
                background: #333;
                border-radius: 3px;
            }
            QSlider::sub-page:horizontal {
                background: #14b8a6;
                border-radius: 3px;
            }
            QSlider::handle:horizontal {
                background: #2dd4bf;
                width: 14px;
                margin: -5px 0;
                border-radius: 7px;
            }
            QComboBox {
                background: #333;
                border: 1px solid #4a4a4a;
                border-radius: 4px;
                padding: 5px 8px;
            }
            QStatusBar {
                background: #1e1e1e;
                color: #999;
            }
        """)

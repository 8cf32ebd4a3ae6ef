"""Background worker for the render pipeline."""

from PySide6.QtCore import QObject, Signal

from models.edit_settings import EditSettings
from models.pixel_buffer import PixelBuffer
from engines.pipeline import render


class RenderWorker(QObject):
    """Runs one pipeline render in a background thread."""

    finished = Signal(object)
    error = Signal(str)
    progress = Signal(str)

    def __init__(self, image: PixelBuffer, settings: EditSettings):
        super().__init__()
        self.image = image
        self.settings = settings

    def run(self):
        try:
            self.progress.emit(
                f"Rendering {self.settings.style.value} ({self.image.width}×{self.image.height})..."
            )
            result = render(self.image, self.settings)
            self.finished.emit(result)
        except Exception as e:
            self.error.emit(str(e))

"""
Canvas Editor
Color adjustments, style presets, crop and rotate for raster images
"""

import logging
import sys


def setup_logging(level: int = logging.INFO):
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_gui():
    """Launch the GUI application."""
    from pathlib import Path
    from PySide6.QtWidgets import QApplication
    from PySide6.QtCore import Qt
    from PySide6.QtGui import QIcon
    from gui.main_window import MainWindow, APP_NAME, APP_VERSION

    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)
    app.setStyle("Fusion")

    icon_path = Path(__file__).parent / "gui" / "icon.png"
    if icon_path.exists():
        app.setWindowIcon(QIcon(str(icon_path)))

    window = MainWindow()
    window.show()
    sys.exit(app.exec())


def run_cli():
    """Run one headless render."""
    from models.edit_settings import EditSettings
    from engines.pipeline import render
    from utils.demo_images import generate_gradient
    from utils.errors import DecodeFailure
    from utils.image_io import load_image, save_image

    args = sys.argv[2:]

    if not args or args[0] == '--help':
        print("Usage: python main.py --cli <image_path> [style] [brightness] [contrast] [saturation] [hue]")
        print("       python main.py --cli --synthetic [style] [brightness] [contrast] [saturation] [hue]")
        sys.exit(0)

    if args[0] == '--synthetic':
        print("Generating test image...")
        image = generate_gradient(512, 512)
    else:
        print(f"Loading: {args[0]}")
        try:
            image = load_image(args[0])
        except DecodeFailure as e:
            print(f"Error: {e}")
            sys.exit(1)

    names = ['style', 'brightness', 'contrast', 'saturation', 'hue']
    values = dict(zip(names, args[1:]))
    try:
        settings = EditSettings.from_dict(values)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(2)

    print(f"Image: {image.width}x{image.height}")
    print(f"Style: {settings.style.value}")

    result = render(image, settings)

    print("\n=== Results ===")
    print(f"Stages:    {' -> '.join(result.stages)}")
    print(f"Adjust:    {result.adjust_time_ms:.2f} ms")
    print(f"Filter:    {result.filter_time_ms:.2f} ms")
    print(f"Total:     {result.total_time_ms:.2f} ms")

    save_image(result.image, "edited.png")
    print("\nSaved: edited.png")


def main():
    setup_logging()
    if len(sys.argv) > 1 and sys.argv[1] == '--cli':
        run_cli()
    else:
        run_gui()


if __name__ == '__main__':
    main()

import logging
import os
import sys
import traceback
import warnings
import threading
import faulthandler
from datetime import datetime
from pathlib import Path

from PySide6.QtCore import qInstallMessageHandler
from PySide6.QtGui import QImageReader
from PySide6.QtWidgets import QApplication, QMessageBox

from infinigrid.engine.errors import EmptyCatalogError
from infinigrid.utils.catalog import scan_catalog
from infinigrid.utils.settings import DEFAULT_SETTINGS, settings
from infinigrid.widgets.main_window import MainWindow


# Install a message handler to suppress QPainter warnings at Qt level
def qt_message_handler(msg_type, msg_context, msg_string):
    """Suppress Qt's QPainter debug messages."""
    if "QPainter" in msg_string or "Paint device returned engine" in msg_string:
        return
    print(f"[Qt] {msg_string}")

CRASH_LOG_PATH = os.path.abspath('infinigrid_crash.log')
FATAL_LOG_PATH = os.path.abspath('infinigrid_fatal.log')
_fatal_log_handle = None
ENABLE_FATAL_CRASH_DUMPS = os.getenv('INFINIGRID_ENABLE_FAULTHANDLER', '0') == '1'


def _append_crash_log(title: str, exc_info=None):
    """Append a timestamped crash entry to the crash log."""
    ts = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
    try:
        with open(CRASH_LOG_PATH, 'a', encoding='utf-8') as f:
            f.write("\n" + "=" * 80 + "\n")
            f.write(f"{ts} | {title}\n")
            f.write("=" * 80 + "\n")
            if exc_info is None:
                f.write(traceback.format_exc())
            else:
                f.writelines(traceback.format_exception(*exc_info))
            f.write("\n")
    except Exception as log_error:
        print(f"[CRASH] Failed to write crash log: {log_error}")
    print(f"[CRASH] Details written to: {CRASH_LOG_PATH}")


def install_crash_handlers():
    """Install Python/thread crash handlers; fatal dumps are opt-in."""
    global _fatal_log_handle
    if _fatal_log_handle is not None:
        return

    def _unhandled_exception(exc_type, exc_value, exc_traceback):
        _append_crash_log("UNHANDLED EXCEPTION", (exc_type, exc_value, exc_traceback))
        sys.__excepthook__(exc_type, exc_value, exc_traceback)

    def _thread_exception(args):
        thread_name = getattr(args.thread, 'name', 'unknown')
        _append_crash_log(
            f"THREAD EXCEPTION ({thread_name})",
            (args.exc_type, args.exc_value, args.exc_traceback),
        )

    sys.excepthook = _unhandled_exception
    threading.excepthook = _thread_exception

    if ENABLE_FATAL_CRASH_DUMPS:
        try:
            _fatal_log_handle = open(FATAL_LOG_PATH, 'a', encoding='utf-8', buffering=1)
            _fatal_log_handle.write(
                "\n" + "=" * 80 + "\n"
                f"{datetime.now().isoformat()} | SESSION START pid={os.getpid()}\n"
                + "=" * 80 + "\n"
            )
            faulthandler.enable(file=_fatal_log_handle, all_threads=True)
            print(f"[CRASH] Fatal trace dumps enabled: {FATAL_LOG_PATH}")
        except Exception as e:
            print(f"[WARNING] Could not enable faulthandler: {e}")


def suppress_warnings():
    """Suppress all warnings when not in a development environment."""
    environment = os.getenv('INFINIGRID_ENVIRONMENT')
    if environment == 'development':
        print('Running in development environment.')
        logging.basicConfig(level=logging.DEBUG)
        return
    logging.getLogger('PIL').setLevel(logging.ERROR)
    logging.basicConfig(level=logging.ERROR)
    warnings.simplefilter('ignore')


def resolve_image_directory(argv: list[str]) -> Path | None:
    """First command line argument wins over the saved setting."""
    if len(argv) > 1:
        directory = Path(argv[1]).expanduser()
        settings.setValue('image_directory', str(directory))
        return directory
    saved = settings.value('image_directory',
                           defaultValue=DEFAULT_SETTINGS['image_directory'], type=str)
    return Path(saved).expanduser() if saved else None


def run_gui(argv: list[str] | None = None) -> int:
    argv = sys.argv if argv is None else argv
    qInstallMessageHandler(qt_message_handler)

    app = QApplication(argv)
    # The application name is shown in the taskbar.
    app.setApplicationName('Infinite Grid')
    # The application display name is shown in the title bar.
    app.setApplicationDisplayName('Infinite Grid')
    app.setStyle('Fusion')
    # Disable the allocation limit to allow loading large images.
    QImageReader.setAllocationLimit(0)

    directory = resolve_image_directory(argv)
    catalog = scan_catalog(directory) if directory is not None else []
    try:
        main_window = MainWindow(app, catalog)
    except EmptyCatalogError as exception:
        error_message_box = QMessageBox()
        error_message_box.setWindowTitle('No images')
        error_message_box.setIcon(QMessageBox.Icon.Critical)
        error_message_box.setText(
            f'{exception}. Pass a directory with images as the first argument.')
        error_message_box.exec()
        return 2
    main_window.show()

    def signal_handler(signum, frame):
        print("\n[SHUTDOWN] Console closing, saving settings...")
        main_window.close()
        sys.exit(0)

    import signal
    signal.signal(signal.SIGINT, signal_handler)  # Ctrl+C
    signal.signal(signal.SIGTERM, signal_handler)  # Termination signal

    return int(app.exec())


def main():
    # Suppress all warnings when not in a development environment.
    suppress_warnings()
    install_crash_handlers()
    try:
        sys.exit(run_gui())
    except Exception as exception:
        _append_crash_log("TOP-LEVEL EXCEPTION", sys.exc_info())
        error_message_box = QMessageBox()
        error_message_box.setWindowTitle('Error')
        error_message_box.setIcon(QMessageBox.Icon.Critical)
        error_message_box.setText(str(exception))
        error_message_box.setDetailedText(traceback.format_exc())
        error_message_box.exec()
        sys.exit(1)


if __name__ == '__main__':
    main()

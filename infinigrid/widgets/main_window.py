from pathlib import Path

from PySide6.QtWidgets import QMainWindow

from infinigrid.utils.settings import settings
from infinigrid.widgets.infinite_grid_view import InfiniteGridView


class MainWindow(QMainWindow):
    def __init__(self, app, catalog: list[Path]):
        super().__init__()
        self.app = app
        self.setWindowTitle('Infinite Grid')
        self.grid_view = InfiniteGridView(catalog, self)
        self.setCentralWidget(self.grid_view)

        geometry = settings.value('geometry')
        if geometry is not None:
            self.restoreGeometry(geometry)
        else:
            self.resize(1280, 800)

    def showEvent(self, event):
        super().showEvent(event)
        if not self.grid_view.preloader.gate:
            self.grid_view.start()

    def closeEvent(self, event):
        """Save the window geometry and stop background work."""
        settings.setValue('geometry', self.saveGeometry())
        settings.sync()
        self.grid_view.teardown()
        super().closeEvent(event)

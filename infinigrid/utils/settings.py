from PySide6.QtCore import QSettings, Signal

# Defaults for settings that are accessed from multiple places.
DEFAULT_SETTINGS = {
    'image_directory': '',
    # Common image formats that are supported in PySide6, as well as JPEG XL.
    'image_file_formats': 'bmp, gif, jpg, jpeg, png, tif, tiff, webp, jxl',
    # Grid geometry (pixels)
    'cell_size': 280,
    'gap': 20,
    'overfill_margin': 4,  # Extra columns/rows beyond the viewport for seamless wrapping
    # Momentum after drag release
    'friction': 0.92,
    'min_velocity': 0.5,  # px/s
    'momentum_timestep': 1 / 60,
    'frame_rate_independent_friction': True,
    # Magnification near the pointer
    'proximity_radius': 350,
    'proximity_max_boost': 0.12,
    # Preloading
    'preload_settle_ms': 400,
    'preload_workers': 4,
    'frame_interval_ms': 16,
    'theme': 'dark',  # dark or light
    'avoid_seam_repeats': False,
}


class Settings(QSettings):
    # Signal that shows that the setting with the given string was changes
    change = Signal(str, object, name='settingsChanged')

    def __init__(self):
        super().__init__('infinigrid', 'infinigrid')

    def setValue(self, key, value):
        super().setValue(key, value)
        self.change.emit(key, value)

# Common shared instance to ensure the Signal is also shared
settings = Settings()


def get_image_file_formats() -> set[str]:
    formats = settings.value(
        'image_file_formats',
        defaultValue=DEFAULT_SETTINGS['image_file_formats'], type=str)
    return {f'.{file_format.strip().lower().lstrip(".")}'
            for file_format in formats.split(',') if file_format.strip()}

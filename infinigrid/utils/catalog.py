"""Image catalog discovery."""

import re
from pathlib import Path

from infinigrid.utils.settings import get_image_file_formats


def natural_sort_key(path: Path):
    """
    Generate a key for natural/alphanumeric sorting.
    Converts 'file1', 'file2', 'file11' to sort naturally instead of lexicographically.
    """
    parts = []
    for part in re.split(r'(\d+)', str(path)):
        if part.isdigit():
            parts.append(int(part))
        else:
            parts.append(part.lower())
    return parts


def scan_catalog(directory_path: Path, file_formats: set[str] | None = None,
                 recursive: bool = False) -> list[Path]:
    """
    List distinct image files in a directory.

    Args:
        directory_path: Directory to scan
        file_formats: Suffixes to accept (with leading dot); defaults to the
            `image_file_formats` setting
        recursive: Also scan subdirectories

    Returns:
        Naturally sorted list of image paths (empty if the directory is missing)
    """
    directory_path = Path(directory_path)
    if not directory_path.is_dir():
        print(f'[CATALOG] Not a directory: {directory_path}')
        return []
    if file_formats is None:
        file_formats = get_image_file_formats()
    file_formats = {suffix.lower() for suffix in file_formats}

    pattern = '**/*' if recursive else '*'
    seen = set()
    image_paths = []
    for path in directory_path.glob(pattern):
        if not path.is_file() or path.suffix.lower() not in file_formats:
            continue
        resolved = path.resolve()
        if resolved in seen:
            continue
        seen.add(resolved)
        image_paths.append(path)
    image_paths.sort(key=natural_sort_key)
    print(f'[CATALOG] Found {len(image_paths)} images in {directory_path}')
    return image_paths

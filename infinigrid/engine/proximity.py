import math


def proximity_scale(
    pointer_x: float | None,
    pointer_y: float | None,
    center_x: float,
    center_y: float,
    radius: float = 350.0,
    max_boost: float = 0.12,
) -> float:
    """Magnification for a cell: 1.0 outside `radius`, rising linearly to 1 + max_boost at the center."""
    if pointer_x is None or pointer_y is None:
        return 1.0
    dx = pointer_x - center_x
    dy = pointer_y - center_y
    d2 = dx * dx + dy * dy
    if d2 >= radius * radius:
        return 1.0
    return 1.0 + (1.0 - math.sqrt(d2) / radius) * max_boost

"""Tunable constants of the grid engine, read from the application settings."""

from __future__ import annotations

from dataclasses import dataclass

from infinigrid.utils.settings import DEFAULT_SETTINGS, settings


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


@dataclass(frozen=True)
class GridEngineConfig:
    cell_size: int = DEFAULT_SETTINGS['cell_size']
    gap: int = DEFAULT_SETTINGS['gap']
    overfill_margin: int = DEFAULT_SETTINGS['overfill_margin']
    friction: float = DEFAULT_SETTINGS['friction']
    min_velocity: float = DEFAULT_SETTINGS['min_velocity']
    timestep: float = DEFAULT_SETTINGS['momentum_timestep']
    frame_rate_independent: bool = DEFAULT_SETTINGS['frame_rate_independent_friction']
    proximity_radius: float = DEFAULT_SETTINGS['proximity_radius']
    proximity_max_boost: float = DEFAULT_SETTINGS['proximity_max_boost']
    avoid_seam_repeats: bool = DEFAULT_SETTINGS['avoid_seam_repeats']

    @property
    def total_cell(self) -> int:
        return self.cell_size + self.gap

    @classmethod
    def from_settings(cls, source=None) -> GridEngineConfig:
        """Build a config from a QSettings-like object (defaults to the shared one)."""
        source = settings if source is None else source

        def read(key, value_type):
            try:
                return source.value(key, defaultValue=DEFAULT_SETTINGS[key],
                                    type=value_type)
            except Exception:
                return DEFAULT_SETTINGS[key]

        return cls(
            cell_size=max(1, int(read('cell_size', int))),
            gap=max(0, int(read('gap', int))),
            overfill_margin=max(0, int(read('overfill_margin', int))),
            # Friction outside (0, 1) would never decay or would reverse direction.
            friction=_clamp(float(read('friction', float)), 0.01, 0.999),
            min_velocity=max(1e-3, float(read('min_velocity', float))),
            timestep=max(1e-3, float(read('momentum_timestep', float))),
            frame_rate_independent=bool(read('frame_rate_independent_friction', bool)),
            proximity_radius=max(1.0, float(read('proximity_radius', float))),
            proximity_max_boost=max(0.0, float(read('proximity_max_boost', float))),
            avoid_seam_repeats=bool(read('avoid_seam_repeats', bool)),
        )

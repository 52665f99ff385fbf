from infinigrid.engine import config as config_module
from infinigrid.engine.config import GridEngineConfig
from infinigrid.utils.settings import DEFAULT_SETTINGS


class FakeSettings:
    def __init__(self, values=None, fail=False):
        self.values = values or {}
        self.fail = fail

    def value(self, key, defaultValue=None, type=None):
        if self.fail:
            raise RuntimeError("broken settings store")
        return self.values.get(key, defaultValue)


def test_defaults_match_reference_constants():
    config = GridEngineConfig()
    assert config.cell_size == 280
    assert config.gap == 20
    assert config.total_cell == 300
    assert config.friction == 0.92
    assert config.min_velocity == 0.5
    assert config.proximity_radius == 350
    assert config.proximity_max_boost == 0.12


def test_from_settings_reads_values():
    config = GridEngineConfig.from_settings(FakeSettings({"cell_size": 200, "gap": 10, "friction": 0.8}))
    assert config.total_cell == 210
    assert config.friction == 0.8


def test_from_settings_clamps_bad_values():
    config = GridEngineConfig.from_settings(
        FakeSettings({"cell_size": 0, "gap": -5, "friction": 1.5, "proximity_max_boost": -1})
    )
    assert config.cell_size == 1
    assert config.gap == 0
    assert 0 < config.friction < 1
    assert config.proximity_max_boost == 0.0


def test_from_settings_falls_back_to_defaults_on_errors():
    config = GridEngineConfig.from_settings(FakeSettings(fail=True))
    assert config.cell_size == DEFAULT_SETTINGS["cell_size"]
    assert config.friction == DEFAULT_SETTINGS["friction"]


def test_from_settings_uses_shared_settings_by_default(monkeypatch):
    monkeypatch.setattr(config_module, "settings", FakeSettings({"overfill_margin": 2}))
    assert GridEngineConfig.from_settings().overfill_margin == 2

import json
from pathlib import Path

import pytest

from shiftmaker.config import RequirementConfig, SchedulerConfig, SlotConfig, load_config
from shiftmaker.domain.db import DEFAULT_DB_URL

ROOT_CONFIG = Path(__file__).resolve().parents[1] / "shiftmaker_config.yaml"


def test_defaults_without_path():
    cfg = load_config()
    assert cfg.db_url == DEFAULT_DB_URL
    assert cfg.consecutive_days_threshold == 3
    assert [s.id for s in cfg.slots] == ["slot-1", "slot-2", "slot-3"]
    assert cfg.requirements == []


def test_shipped_config_loads():
    cfg = load_config(ROOT_CONFIG)
    settings = cfg.to_month_settings(2026, 2)

    assert len(settings.slots) == 3
    assert len(settings.requirements) == 18
    assert {r.day_type for r in settings.requirements} == {"weekday", "weekend"}
    assert settings.slot_by_id("slot-2").label == "11:00-L"


def test_yaml_config_normalizes_case(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text(
        """
db_url: "sqlite:///:memory:"
consecutive_days_threshold: 4
slots:
  - id: am
    label: Morning
  - id: pm
    label: Evening
requirements:
  - {day_type: Weekday, slot_id: am, role: Leader, count: 1}
  - {day_type: WEEKEND, slot_id: pm, role: kitchen, count: 2}
"""
    )

    cfg = load_config(path)

    assert cfg.db_url == "sqlite:///:memory:"
    assert cfg.consecutive_days_threshold == 4
    assert [(s.id, s.order) for s in cfg.slots] == [("am", 1), ("pm", 2)]
    assert cfg.requirements[0] == RequirementConfig("weekday", "am", "leader", 1)
    assert cfg.requirements[1].day_type == "weekend"


def test_json_config(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"requirements": [{"day_type": "weekday", "slot_id": "slot-3", "role": "hall", "count": 2}]}))

    cfg = load_config(path)
    settings = cfg.to_month_settings(2026, 3)

    assert (settings.year, settings.month) == (2026, 3)
    assert settings.requirements[0].id == "req-1"
    assert settings.requirements[0].count == 2


@pytest.mark.parametrize(
    "cfg",
    [
        SchedulerConfig(consecutive_days_threshold=1),
        SchedulerConfig(slots=[SlotConfig("a", "A"), SlotConfig("a", "B")]),
        SchedulerConfig(requirements=[RequirementConfig("weekday", "slot-1", "manager", 1)]),
        SchedulerConfig(requirements=[RequirementConfig("holiday", "slot-1", "hall", 1)]),
        SchedulerConfig(requirements=[RequirementConfig("weekday", "slot-1", "hall", -1)]),
        SchedulerConfig(requirements=[RequirementConfig("weekday", "slot-9", "hall", 1)]),
    ],
)
def test_validation_errors(cfg):
    with pytest.raises(ValueError):
        cfg.validate()

import json

from backend import settings


def test_defaults_written_on_first_load():
    values = settings.get_settings()
    assert {item["key"]: item["value"] for item in values} == {
        "rest_duration": 60,
        "workout_goal": 5,
        "hour_goal": 10,
    }
    with settings.SETTINGS_PATH.open() as fh:
        assert json.load(fh) == values


def test_set_value_persists():
    settings.set_value("rest_duration", 90)
    settings.clear_cache()
    assert settings.get_value("rest_duration") == 90
    assert settings.get_rest_duration() == 90


def test_unknown_key_appended():
    settings.set_value("sound_on", False)
    settings.clear_cache()
    assert settings.get_value("sound_on") is False
    assert settings.get_value("missing", "fallback") == "fallback"


def test_corrupt_file_falls_back_to_defaults():
    settings.SETTINGS_PATH.write_text("{not json")
    assert settings.get_rest_duration() == 60


def test_goals_fall_back_for_unset_values():
    settings.set_value("workout_goal", 0)
    settings.set_value("hour_goal", None)
    assert settings.get_goals() == (5, 10)
    settings.set_value("workout_goal", 3)
    settings.set_value("hour_goal", "6")
    assert settings.get_goals() == (3, 6)


def test_rest_duration_zero_allowed_negative_rejected():
    settings.set_value("rest_duration", 0)
    assert settings.get_rest_duration() == 0
    settings.set_value("rest_duration", -5)
    assert settings.get_rest_duration() == 60
    settings.set_value("rest_duration", "abc")
    assert settings.get_rest_duration() == 60

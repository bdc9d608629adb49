import click
import pytest

from scumblob.profiles import (
    BUILTIN_PRESETS,
    Config,
    Preset,
    load_config,
    resolve_keys,
    save_config,
    validate_preset_name,
)


def test_missing_config_is_empty(config_path):
    config = load_config(config_path)
    assert config.default_preset is None
    assert config.presets == {}


def test_save_and_load(config_path):
    config = Config(default_preset="vitals")
    config.presets["vitals"] = Preset(name="vitals", keys=["HeartRate", 'Odd"Key'])
    save_config(config, config_path)

    loaded = load_config(config_path)
    assert loaded.default_preset == "vitals"
    assert loaded.presets["vitals"].keys == ["HeartRate", 'Odd"Key']


def test_builtins_always_present(config_path):
    presets = load_config(config_path).all_presets()
    for name in BUILTIN_PRESETS:
        assert presets[name].builtin


def test_invalid_toml(config_path):
    config_path.write_text("default_preset = [", encoding="utf-8")
    with pytest.raises(click.ClickException):
        load_config(config_path)


def test_invalid_preset_keys(config_path):
    config_path.write_text('[presets.bad]\nkeys = "HeartRate"\n', encoding="utf-8")
    with pytest.raises(click.ClickException):
        load_config(config_path)


@pytest.mark.parametrize("name,ok", [("vitals", True), ("my-preset_2", True), ("bad name", False), ("", False)])
def test_validate_preset_name(name, ok):
    assert validate_preset_name(name) is ok


def test_explicit_keys_win():
    config = Config(default_preset="base_attributes")
    assert resolve_keys(("A", "B"), "body_simulation", config) == ["A", "B"]


def test_named_preset_beats_default():
    config = Config(default_preset="base_attributes")
    assert resolve_keys((), "body_simulation", config) == BUILTIN_PRESETS["body_simulation"]


def test_default_preset_used():
    config = Config(default_preset="base_attributes")
    assert resolve_keys((), None, config) == BUILTIN_PRESETS["base_attributes"]


def test_nothing_resolves():
    with pytest.raises(click.UsageError):
        resolve_keys((), None, Config())


def test_unknown_preset():
    with pytest.raises(click.UsageError, match="not found"):
        resolve_keys((), "nope", Config())


def test_quoted_preset_names_survive_resave(config_path):
    config_path.write_text('[presets."a b"]\nkeys = ["HeartRate"]\n', encoding="utf-8")
    config = load_config(config_path)
    config.presets["vitals"] = Preset(name="vitals", keys=["Stamina"])
    save_config(config, config_path)

    loaded = load_config(config_path)
    assert loaded.presets["a b"].keys == ["HeartRate"]
    assert loaded.presets["vitals"].keys == ["Stamina"]

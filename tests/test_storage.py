from unittest.mock import patch

import pytest

from aliasmgr.errors import ConfigFileError
from aliasmgr.models import Alias, Config, Group
from aliasmgr.storage import ConfigStore, dumps, loads


def test_loads(sample_toml, sample_config):
    config = loads(sample_toml)

    assert config == sample_config
    assert list(config.aliases) == ["py", "js", "ga", "gc", "bar", "G"]
    assert list(config.groups) == ["git", "foo"]


def test_dumps(sample_config):
    expected = (
        'py = "python3"\n'
        'js = { command = "node", enabled = false }\n'
        "[git]\n"
        'ga = "git add"\n'
        'gc = "git commit"\n'
        "[foo]\n"
        "enabled = false\n"
        "bar = \"echo 'Hello World'\"\n"
        'G = { command = "| grep", global = true }\n'
    )

    assert dumps(sample_config) == expected


def test_dumps__empty():
    assert dumps(Config()) == ""


def test_dumps__ungrouped_aliases_come_before_groups():
    config = Config(
        aliases={
            "ga": Alias(name="ga", command="git add", group="git"),
            "ll": Alias(name="ll", command="ls -la"),
        },
        groups={"git": Group(name="git")},
    )

    assert dumps(config) == 'll = "ls -la"\n[git]\nga = "git add"\n'


def test_dumps__escapes_strings():
    config = Config(aliases={"say": Alias(name="say", command='echo "hi" \\ there')})

    text = dumps(config)

    assert text == 'say = "echo \\"hi\\" \\\\ there"\n'
    assert loads(text) == config


def test_round_trip(sample_config):
    assert loads(dumps(sample_config)) == sample_config


def test_round_trip__empty_and_disabled_groups():
    config = Config(
        aliases={"x": Alias(name="x", command="exit", enabled=False, is_global=True, group="b")},
        groups={"a": Group(name="a"), "b": Group(name="b", enabled=False)},
    )

    assert loads(dumps(config)) == config


def test_loads__detailed_enabled_alias_is_plain():
    config = loads('ll = { command = "ls -la", enabled = true }\n')

    assert config.aliases["ll"] == Alias(name="ll", command="ls -la")
    assert dumps(config) == 'll = "ls -la"\n'


def test_loads__invalid_toml():
    with pytest.raises(ConfigFileError, match="Invalid TOML"):
        loads("py = \n")


def test_loads__nested_groups():
    with pytest.raises(ConfigFileError, match="Nested groups"):
        loads("[outer.inner]\nx = \"ls\"\n")


def test_loads__wrong_value_type():
    with pytest.raises(ConfigFileError):
        loads("py = 3\n")


def test_loads__non_boolean_group_enabled():
    with pytest.raises(ConfigFileError, match="non-boolean"):
        loads('[git]\nenabled = "no"\nga = "git add"\n')


def test_loads__duplicate_alias_across_groups():
    with pytest.raises(ConfigFileError, match="more than once"):
        loads('ga = "git add"\n[git]\nga = "git add -A"\n')


def test_loads__alias_named_like_group():
    with pytest.raises(ConfigFileError, match="more than once"):
        loads('git = "git status"\n[git]\nga = "git add"\n')


def test_loads__invalid_alias_name():
    with pytest.raises(ConfigFileError, match="invalid character"):
        loads('"bad name" = "ls"\n')


def test_load__missing_file(tmp_path):
    store = ConfigStore(tmp_path / "nothing" / "aliases.toml")

    assert store.load() == Config()


def test_load__existing_file(config_file, sample_config):
    store = ConfigStore(config_file)

    assert store.load() == sample_config


def test_load__reports_path_on_error(tmp_path):
    path = tmp_path / "aliases.toml"
    path.write_text("[[broken\n")

    with pytest.raises(ConfigFileError, match=str(path)):
        ConfigStore(path).load()


def test_save__creates_parent_directories(tmp_path, sample_config):
    path = tmp_path / "deep" / "er" / "aliases.toml"
    store = ConfigStore(path)

    store.save(sample_config)

    assert path.exists()
    assert store.load() == sample_config
    assert [p.name for p in path.parent.iterdir()] == ["aliases.toml"]


def test_save__failed_replace_keeps_original(config_file, sample_toml):
    store = ConfigStore(config_file)

    with patch("aliasmgr.storage.os.replace", side_effect=OSError("disk full")):
        with pytest.raises(ConfigFileError, match="disk full"):
            store.save(Config())

    assert config_file.read_text() == sample_toml
    assert [p.name for p in config_file.parent.iterdir()] == ["aliases.toml"]


def test_store_uses_env_path(tmp_path, monkeypatch):
    path = tmp_path / "custom.toml"
    monkeypatch.setenv("ALIASMGR_CONFIG_PATH", str(path))

    assert ConfigStore().path == path

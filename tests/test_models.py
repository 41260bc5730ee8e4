"""Tests for the alias model"""

import pytest

from aliasmgr.errors import AliasNotFoundError, ConfigFileError, GroupNotFoundError, InvalidNameError
from aliasmgr.models import Alias, Config, suggest, validate_name


class TestAlias:
    def test_enabled_non_global_alias_is_not_detailed(self):
        alias = Alias(name="ll", command="ls -la")

        assert alias.detailed is False
        assert alias.to_value() == "ls -la"

    def test_disabled_alias_is_detailed(self):
        alias = Alias(name="ll", command="ls -la", enabled=False)

        assert alias.detailed is True
        assert alias.to_value() == {"command": "ls -la", "enabled": False}

    def test_global_alias_is_detailed(self):
        alias = Alias(name="G", command="| grep", is_global=True)

        assert alias.detailed is True
        assert alias.to_value() == {"command": "| grep", "global": True}

    def test_disabled_global_alias_is_detailed(self):
        alias = Alias(name="G", command="| grep", enabled=False, is_global=True)

        assert alias.to_value() == {"command": "| grep", "enabled": False, "global": True}

    def test_from_value_string(self):
        assert Alias.from_value("ll", "ls -la", group="fs") == Alias(name="ll", command="ls -la", group="fs")

    def test_from_value_table(self):
        alias = Alias.from_value("G", {"command": "| grep", "global": True})

        assert alias == Alias(name="G", command="| grep", is_global=True)

    def test_from_value_rejects_unknown_keys(self):
        with pytest.raises(ConfigFileError, match="unknown keys"):
            Alias.from_value("ll", {"command": "ls", "color": "red"})

    def test_from_value_rejects_non_boolean_flags(self):
        with pytest.raises(ConfigFileError):
            Alias.from_value("ll", {"command": "ls", "enabled": "yes"})

    def test_is_alias_table(self):
        assert Alias.is_alias_table({"command": "ls", "enabled": False})
        assert not Alias.is_alias_table({"ga": "git add"})
        assert not Alias.is_alias_table({"command": "ls", "ga": "git add"})

    def test_str(self):
        assert str(Alias(name="ll", command="ls -la")) == "ll='ls -la'"


@pytest.mark.parametrize("name", ["ll", "g-st", "..", "k8s.get", "_x"])
def test_validate_name__valid(name):
    assert validate_name(name) == name


@pytest.mark.parametrize("name", ["", "two words", "a=b", "tab\there", "it's", "$x", "a;b", "command", "enabled", "global"])
def test_validate_name__invalid(name):
    with pytest.raises(InvalidNameError):
        validate_name(name)


def test_suggest():
    assert suggest("gts", ["gst", "ll", "py"]) == "gst"
    assert suggest("zzzz", ["gst", "ll"]) is None
    assert suggest("x", []) is None


class TestConfig:
    def test_get_alias__missing_with_suggestion(self, sample_config):
        with pytest.raises(AliasNotFoundError, match="did you mean 'ga'"):
            sample_config.get_alias("gaa")

    def test_get_group__missing(self, sample_config):
        with pytest.raises(GroupNotFoundError, match="Group 'nope' does not exist"):
            sample_config.get_group("nope")

    def test_members(self, sample_config):
        assert [a.name for a in sample_config.members("git")] == ["ga", "gc"]
        assert [a.name for a in sample_config.members(None)] == ["py", "js"]

    def test_is_active(self, sample_config):
        assert sample_config.is_active(sample_config.aliases["py"])
        assert not sample_config.is_active(sample_config.aliases["js"])
        assert sample_config.is_active(sample_config.aliases["ga"])
        # enabled alias in a disabled group
        assert not sample_config.is_active(sample_config.aliases["bar"])

    def test_name_taken(self, sample_config):
        assert sample_config.name_taken("py")
        assert sample_config.name_taken("git")
        assert not sample_config.name_taken("nope")

    def test_empty(self):
        config = Config()

        assert config.aliases == {}
        assert config.groups == {}

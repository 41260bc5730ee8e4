import pytest

from aliasmgr.models import Alias, Config, Group


@pytest.fixture
def sample_toml() -> str:
    return (
        'py = "python3"\n'
        'js = { command = "node", enabled = false }\n'
        "[git]\n"
        'ga = "git add"\n'
        'gc = { command = "git commit", enabled = true }\n'
        "[foo]\n"
        "enabled = false\n"
        "bar = \"echo 'Hello World'\"\n"
        'G = { command = "| grep", global = true }\n'
    )


@pytest.fixture
def sample_config() -> Config:
    return Config(
        aliases={
            "py": Alias(name="py", command="python3"),
            "js": Alias(name="js", command="node", enabled=False),
            "ga": Alias(name="ga", command="git add", group="git"),
            "gc": Alias(name="gc", command="git commit", group="git"),
            "bar": Alias(name="bar", command="echo 'Hello World'", group="foo"),
            "G": Alias(name="G", command="| grep", is_global=True, group="foo"),
        },
        groups={
            "git": Group(name="git"),
            "foo": Group(name="foo", enabled=False),
        },
    )


@pytest.fixture
def config_file(tmp_path, sample_toml):
    path = tmp_path / "aliasmgr" / "aliases.toml"
    path.parent.mkdir()
    path.write_text(sample_toml)
    return path

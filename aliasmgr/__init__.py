"""aliasmgr - manage shell aliases from a single TOML file"""

__version__ = "0.1.0"

from unittest.mock import patch

import pytest

from aliasmgr.shell_detector import DEFAULT_SHELL, ShellDetector, ShellType


@pytest.fixture
def shell_detector():
    """Fixture for ShellDetector instance"""
    return ShellDetector()


class TestShellType:
    def test_parse(self):
        assert ShellType.parse("zsh") is ShellType.ZSH
        assert ShellType.parse(" BASH ") is ShellType.BASH
        assert ShellType.parse("fish") is None

    def test_supports_global_aliases(self):
        assert ShellType.ZSH.supports_global_aliases
        assert not ShellType.BASH.supports_global_aliases


class TestDetectCurrentShell:
    def test_from_aliasmgr_env(self, shell_detector):
        with patch.dict("os.environ", {"ALIASMGR_SHELL": "zsh", "SHELL": "/bin/bash"}, clear=True):
            assert shell_detector.detect_current_shell() is ShellType.ZSH

    def test_invalid_aliasmgr_env_falls_back_to_default(self, shell_detector):
        with patch.dict("os.environ", {"ALIASMGR_SHELL": "fish", "SHELL": "/bin/zsh"}, clear=True):
            assert shell_detector.detect_current_shell() is DEFAULT_SHELL

    def test_from_shell_env(self, shell_detector):
        with patch.dict("os.environ", {"SHELL": "/usr/local/bin/zsh"}, clear=True):
            assert shell_detector.detect_current_shell() is ShellType.ZSH
        with patch.dict("os.environ", {"SHELL": "/bin/bash"}, clear=True):
            assert shell_detector.detect_current_shell() is ShellType.BASH

    def test_nothing_set(self, shell_detector):
        with patch.dict("os.environ", {"SHELL": "/usr/bin/fish"}, clear=True):
            assert shell_detector.detect_current_shell() is ShellType.BASH

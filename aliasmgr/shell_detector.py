"""Shell selection for alias output"""

import logging
import os
from enum import Enum
from typing import Optional

from aliasmgr.config import SHELL_ENV_VAR

logger = logging.getLogger(__name__)


class ShellType(Enum):
    """Supported shell types"""

    BASH = "bash"
    ZSH = "zsh"

    @property
    def supports_global_aliases(self) -> bool:
        return self is ShellType.ZSH

    @classmethod
    def parse(cls, value: str) -> Optional["ShellType"]:
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


DEFAULT_SHELL = ShellType.BASH


class ShellDetector:
    """Decide which shell dialect to emit"""

    def detect_current_shell(self) -> ShellType:
        """Pick the shell from ALIASMGR_SHELL, then $SHELL, then the default"""
        configured = os.environ.get(SHELL_ENV_VAR)
        if configured:
            shell = ShellType.parse(configured)
            if shell:
                return shell
            logger.warning(
                "Invalid %s value %r, using %s",
                SHELL_ENV_VAR,
                configured,
                DEFAULT_SHELL.value,
            )
            return DEFAULT_SHELL

        shell_env = os.environ.get("SHELL", "").lower()
        if shell_env.endswith("zsh"):
            logger.info("%s not set, detected zsh from $SHELL", SHELL_ENV_VAR)
            return ShellType.ZSH
        if shell_env.endswith("bash"):
            logger.info("%s not set, detected bash from $SHELL", SHELL_ENV_VAR)
            return ShellType.BASH

        logger.warning(
            "%s is not set, add 'eval \"$(aliasmgr init <shell>)\"' to your shell config. Using %s",
            SHELL_ENV_VAR,
            DEFAULT_SHELL.value,
        )
        return DEFAULT_SHELL

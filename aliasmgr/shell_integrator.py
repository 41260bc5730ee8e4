"""Shell integration: init snippet and alias delta delivery"""

import logging
import os
import shlex
from pathlib import Path
from typing import Optional

from aliasmgr.config import CONFIG_PATH_ENV_VAR, SHELL_ENV_VAR
from aliasmgr.shell_detector import ShellType

logger = logging.getLogger(__name__)

DELTA_FD = 3

WRAPPER_FUNCTION = """
# Wrap aliasmgr so alias changes apply to the current shell.
# The real binary writes alias deltas to fd 3; stdout stays on the terminal.
__aliasmgr_cmd="$(command -v aliasmgr)"

aliasmgr() {
    local deltas
    {
        deltas="$("$__aliasmgr_cmd" "$@" 3>&1 1>&4)"
    } 4>&1
    if [ -n "$deltas" ]; then
        eval "$deltas"
    fi
}
"""


class ShellIntegrator:
    """Bridge between aliasmgr and the interactive shell it runs under"""

    def __init__(self, delta_fd: int = DELTA_FD):
        self.delta_fd = delta_fd

    def init_script(self, shell: ShellType, config_path: Optional[Path] = None) -> str:
        """Snippet meant for `eval "$(aliasmgr init <shell>)"` in the rc file"""
        lines = [
            "# aliasmgr shell integration",
            f"export {SHELL_ENV_VAR}={shell.value}",
        ]
        if config_path is not None:
            resolved = Path(config_path).expanduser().absolute()
            lines.append(f"export {CONFIG_PATH_ENV_VAR}={shlex.quote(str(resolved))}")

        content = "\n".join(lines) + "\n" + WRAPPER_FUNCTION
        content += "\n# Load aliases on shell startup\naliasmgr sync\n"
        return content

    def wrapper_listening(self) -> bool:
        try:
            os.fstat(self.delta_fd)
        except OSError:
            return False
        return True

    def send_delta(self, delta: str) -> bool:
        """Write alias statements to the wrapper's fd; False if nobody listens"""
        if not self.wrapper_listening():
            logger.debug("fd %d is not open, alias delta not delivered", self.delta_fd)
            return False

        payload = delta if delta.endswith("\n") else delta + "\n"
        try:
            os.write(self.delta_fd, payload.encode("utf-8"))
        except OSError as e:
            logger.error("Failed to send alias delta to the shell: %s", e)
            return False
        logger.debug("Sent alias delta to shell:\n%s", delta)
        return True

"""Scanner for aliases defined in existing shell files"""

import logging
import re
from pathlib import Path
from typing import List

from aliasmgr.errors import AliasMgrError, ConfigFileError
from aliasmgr.models import Alias, validate_name

logger = logging.getLogger(__name__)


class AliasScanner:
    """Read `alias` definitions out of shell configuration files"""

    # alias [-g] name='cmd' | name="cmd" | name=cmd, at line start or after ; && ||
    ALIAS_PATTERN = re.compile(
        r"""(?:^|[;&|])[ \t]*alias[ \t]+(?P<global>-g[ \t]+)?(?P<name>[^\s=;]+)="""
        r"""(?:'(?P<single>(?:[^'\n]|'\\'')*)'|"(?P<double>(?:[^"\\\n]|\\.)*)"|(?P<bare>[^\s;&|]+))""",
        re.MULTILINE,
    )

    def scan_text(self, text: str) -> List[Alias]:
        """Parse alias definitions from shell source"""
        aliases = []
        for match in self.ALIAS_PATTERN.finditer(text):
            name = match.group("name")
            try:
                validate_name(name)
            except AliasMgrError as e:
                logger.warning("Skipping alias: %s", e)
                continue

            if match.group("single") is not None:
                # Undo the '\'' idiom used to embed single quotes
                command = match.group("single").replace("'\\''", "'")
            elif match.group("double") is not None:
                command = match.group("double").replace('\\"', '"')
            else:
                command = match.group("bare")

            if not command.strip():
                logger.warning("Skipping alias '%s' with an empty command", name)
                continue
            aliases.append(Alias(name=name, command=command, is_global=bool(match.group("global"))))
        return aliases

    def scan_file(self, filepath: Path) -> List[Alias]:
        """Scan a single file for aliases"""
        try:
            content = filepath.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigFileError(f"Cannot read {filepath}: {e}") from e
        return self.scan_text(content)

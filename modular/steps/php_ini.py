"""
php.ini step: enforce a handful of directives by in-place text substitution.
"""

import re
from typing import Dict, List, Optional, Tuple

from common.download_utils import ProvisioningError
from common.file_utils import backup_file, write_file_elevated
from modular.base_step import BaseStep
from modular.registry import StepRegistry


def _directive_re(name: str) -> "re.Pattern[str]":
    # Matches active and commented-out (";") assignments of the directive.
    return re.compile(rf"^[ \t]*;?[ \t]*{re.escape(name)}[ \t]*=.*$", re.MULTILINE)


def _active_value(text: str, name: str) -> Optional[str]:
    """Returns the value of the last uncommented assignment, as PHP does."""
    pattern = re.compile(
        rf"^[ \t]*{re.escape(name)}[ \t]*=[ \t]*(.*?)[ \t]*$", re.MULTILINE
    )
    matches = pattern.findall(text)
    if not matches:
        return None
    return matches[-1].strip().strip('"')


def pending_directives(text: str, tweaks: Dict[str, str]) -> Dict[str, str]:
    return {
        name: value
        for name, value in tweaks.items()
        if _active_value(text, name) != value
    }


def apply_directives(text: str, tweaks: Dict[str, str]) -> Tuple[str, List[str]]:
    """
    Rewrites `text` so each directive in `tweaks` is set to its value.

    The first existing assignment (commented out or not) is replaced and any
    later active ones are commented out; directives not present at all are
    appended. Returns the new text and the names that were appended.
    """
    appended: List[str] = []
    for name, value in tweaks.items():
        pattern = _directive_re(name)
        line = f"{name} = {value}"
        seen = False

        def substitute(match: "re.Match[str]") -> str:
            nonlocal seen
            original = match.group(0)
            if not seen:
                seen = True
                return line
            if original.lstrip().startswith(";"):
                return original
            return f";{original}"

        text = pattern.sub(substitute, text)
        if not seen:
            if text and not text.endswith("\n"):
                text += "\n"
            text += line + "\n"
            appended.append(name)
    return text, appended


@StepRegistry.register(
    name="php_ini",
    metadata={
        "dependencies": [],
        "description": "Apply php.ini tweaks",
    },
)
class PhpIniStep(BaseStep):
    def is_enabled(self) -> bool:
        return self.app_settings.php.apply_tweaks and bool(self.app_settings.php.tweaks)

    def _read_ini(self) -> str:
        ini_path = self.app_settings.php.ini_path
        if not ini_path.is_file():
            raise ProvisioningError(f"php.ini not found at {ini_path}")
        return ini_path.read_text(encoding="utf-8")

    def is_satisfied(self) -> bool:
        return not pending_directives(self._read_ini(), self.app_settings.php.tweaks)

    def apply(self) -> bool:
        ini_path = self.app_settings.php.ini_path
        original = self._read_ini()
        pending = pending_directives(original, self.app_settings.php.tweaks)

        if not backup_file(ini_path, self.app_settings, self.logger):
            self.logger.error(
                f"{self.symbols.get('error', '❌')} Could not back up {ini_path}; leaving it untouched."
            )
            return False

        updated, appended = apply_directives(original, pending)
        write_file_elevated(ini_path, updated, self.app_settings, mode="644", current_logger=self.logger)
        for name, value in pending.items():
            self.logger.info(f"   {name} = {value}")
        if appended:
            self.logger.info(f"   appended: {', '.join(appended)}")
        return True

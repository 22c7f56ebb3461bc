"""Ruby syntax validation used by atomic mode."""

import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional, Tuple

from .errors import SyntaxCheckUnavailable
from .logging import get_debug_logger

debug_log = get_debug_logger()


def _validate_command(cmd: List[str], executable: str) -> None:
    """Validate command is safe to execute."""
    if not isinstance(cmd, list) or not cmd:
        raise SyntaxCheckUnavailable("Invalid command format")

    if cmd[0] != executable:
        raise SyntaxCheckUnavailable("Invalid command")

    # Validate all arguments are strings
    if not all(isinstance(arg, str) for arg in cmd):
        raise SyntaxCheckUnavailable("Invalid command arguments")


class SyntaxValidator:
    """Checks Ruby source with ``ruby -c``."""

    def __init__(self, ruby: str = "ruby"):
        self.ruby = ruby

    def _resolve(self) -> str:
        ruby_path = shutil.which(self.ruby)
        if not ruby_path:
            raise SyntaxCheckUnavailable(f"{self.ruby} not found in PATH")
        return ruby_path

    def _run(self, cmd: List[str], executable: str) -> Tuple[str, str, int]:
        _validate_command(cmd, executable)
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as e:
            raise SyntaxCheckUnavailable(f"Could not run {executable}: {e}") from e
        return result.stdout, result.stderr, result.returncode

    def check_syntax(self, code: str) -> Optional[str]:
        """Return the interpreter's error message, or None if the code is valid."""
        ruby_path = self._resolve()

        fd, tmp_name = tempfile.mkstemp(prefix="rbisort_", suffix=".rb")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(code)

            _, stderr, returncode = self._run([ruby_path, "-c", tmp_name], ruby_path)
        finally:
            os.unlink(tmp_name)

        if returncode == 0:
            return None

        debug_log.debug(f"ruby -c failed: {stderr.strip()}")
        return stderr.strip() or f"{self.ruby} -c exited with status {returncode}"

    def is_valid(self, code: str) -> bool:
        """Check whether the code parses."""
        return self.check_syntax(code) is None

    def valid_file(self, path: Path) -> bool:
        """Check a file on disk; unreadable files are reported as invalid."""
        try:
            content = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return False
        return self.is_valid(content)

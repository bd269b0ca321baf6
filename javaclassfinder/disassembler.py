"""External disassembler (``javap``) invocation.

The child inherits the terminal streams so its listing appears verbatim in
the report. Its exit status is awaited but not inspected.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import sys
from collections.abc import Sequence

from .errors import DisassemblerError

logger = logging.getLogger(__name__)


def build_command(
    tool: Sequence[str],
    class_identifier: str,
    private: bool = False,
    classpath: str | None = None,
) -> list[str]:
    """``<tool> [-p] [-classpath <archive>] <classIdentifier>``."""
    cmd = list(tool)
    if private:
        cmd.append("-p")
    if classpath is not None:
        cmd.extend(["-classpath", classpath])
    cmd.append(class_identifier)
    return cmd


def run_disassembler(
    tool: Sequence[str],
    class_identifier: str,
    private: bool = False,
    classpath: str | None = None,
) -> int:
    """Run the disassembler in the foreground and return its exit code.

    Raises ``DisassemblerError`` when the process cannot be started.
    """
    cmd = build_command(tool, class_identifier, private=private, classpath=classpath)
    logger.debug(shlex.join(cmd))
    # Report lines written so far must precede the child's output.
    sys.stdout.flush()
    try:
        completed = subprocess.run(cmd, check=False)
    except OSError as exc:
        raise DisassemblerError(f"Failed to run disassembler {cmd[0]!r}: {exc}") from exc
    return completed.returncode


__all__ = ["build_command", "run_disassembler"]

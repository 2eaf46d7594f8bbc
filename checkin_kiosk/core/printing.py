from __future__ import annotations
import asyncio
import logging
import os
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Protocol

from ..errors import PrintError

logger = logging.getLogger(__name__)

class BadgePrinter(Protocol):
    async def print_document(self, path: Path) -> None: ...

class LpPrinter:
    """Sends a PDF to CUPS through the `lp` command."""

    def __init__(self, command: str = "lp", printer: str | None = None):
        self.command = command
        self.printer = printer

    def argv(self, path: Path) -> list[str]:
        args = [self.command]
        if self.printer:
            args += ["-d", self.printer]
        args.append(str(path))
        return args

    async def print_document(self, path: Path) -> None:
        try:
            proc = await asyncio.create_subprocess_exec(
                *self.argv(path),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise PrintError(f"cannot run {self.command}: {e}") from e
        out, err = await proc.communicate()
        if proc.returncode != 0:
            raise PrintError(f"{self.command} exited with {proc.returncode}: {err.decode(errors='replace').strip()}")
        logger.info("badge sent to printer: %s", out.decode(errors="replace").strip())

@asynccontextmanager
async def badge_document(content: bytes) -> AsyncIterator[Path]:
    """Materialise a badge PDF as a temp file; removed again on exit."""
    fd, name = tempfile.mkstemp(prefix="badge-", suffix=".pdf")
    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(content)
        yield path
    finally:
        path.unlink(missing_ok=True)

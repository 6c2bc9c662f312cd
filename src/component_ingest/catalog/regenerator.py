"""Rebuild the catalog index by running the external generation script."""

import asyncio
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel

from component_ingest.errors import RegenerationFailed, ScriptNotFound

logger = logging.getLogger(__name__)


class CommandResult(BaseModel):
    returncode: int
    stdout: str = ""
    stderr: str = ""


class CommandRunner(Protocol):
    """Runs an external command to completion."""

    async def run(self, args: Sequence[str], *, cwd: Path, timeout: float) -> CommandResult: ...


class SubprocessRunner:
    """CommandRunner backed by asyncio subprocesses."""

    async def run(self, args: Sequence[str], *, cwd: Path, timeout: float) -> CommandResult:
        process = await asyncio.create_subprocess_exec(
            *args,
            cwd=cwd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise
        return CommandResult(
            returncode=process.returncode if process.returncode is not None else -1,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
        )


class CatalogRegenerator:
    """Runs the generation script and relays the tail of its output."""

    def __init__(
        self,
        script: Path,
        cwd: Path,
        runner: CommandRunner | None = None,
        timeout: float = 60.0,
        tail_lines: int = 20,
    ):
        self.script = Path(script)
        self.cwd = Path(cwd)
        self.runner = runner or SubprocessRunner()
        self.timeout = timeout
        self.tail_lines = tail_lines

    async def regenerate(self) -> list[str]:
        """Run the script; return the last lines of its combined output."""
        if not self.script.is_file():
            raise ScriptNotFound(str(self.script))

        logger.info("Regenerating catalog with %s", self.script)
        try:
            result = await self.runner.run(
                [sys.executable, str(self.script)], cwd=self.cwd, timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            raise RegenerationFailed(
                f"Generation script timed out after {self.timeout:g}s"
            ) from e
        except OSError as e:
            raise RegenerationFailed(str(e)) from e

        if result.returncode != 0:
            raise RegenerationFailed(
                result.stderr.strip() or f"Generation script exited with code {result.returncode}"
            )

        combined = result.stdout + result.stderr
        logger.info("Catalog regenerated successfully")
        return combined.rstrip("\n").split("\n")[-self.tail_lines :]

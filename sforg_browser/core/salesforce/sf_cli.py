"""Thin async wrapper around the Salesforce ``sf`` command-line tool."""

import asyncio
import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from sforg_browser.utils.errors import (
    CliNotFoundError,
    MalformedSessionError,
    SessionNotFoundError,
)
from sforg_browser.utils.logging import async_log_call, get_logger

logger = get_logger(__name__)

_JSON_BLOCK = re.compile(r"\{[\s\S]*\}")


@dataclass(frozen=True)
class CommandResult:
    """Captured outcome of one sf invocation."""

    args: List[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def error_text(self) -> str:
        """Best available human-readable failure reason."""
        payload = extract_json(self.stdout)
        if payload and payload.get("message"):
            return str(payload["message"])
        text = (self.stderr or self.stdout).strip()
        return text.splitlines()[-1] if text else f"exit status {self.returncode}"


def extract_json(output: str) -> Optional[Dict[str, Any]]:
    """Pull the JSON document out of sf output that may be preceded by warnings."""
    match = _JSON_BLOCK.search(output or "")
    if not match:
        return None
    try:
        payload = json.loads(match.group(0))
    except json.JSONDecodeError:
        return None
    return payload if isinstance(payload, dict) else None


class SfCli:
    """Runs sf commands in a working directory and interprets their output."""

    def __init__(self, command: str = "sf", timeout: Optional[float] = None):
        self.command = command
        self.timeout = timeout

    async def run(self, *args: str, cwd: Optional[Path] = None) -> CommandResult:
        """Run ``sf <args>`` and capture its output.

        Raises:
            CliNotFoundError: if the executable cannot be started
        """
        argv = [self.command, *args]
        logger.debug(f"Running: {' '.join(argv)}")

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                cwd=str(cwd) if cwd else None,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except (FileNotFoundError, PermissionError) as e:
            raise CliNotFoundError(details={"command": self.command}) from e

        stdout, stderr = await asyncio.wait_for(process.communicate(), self.timeout)
        result = CommandResult(
            args=argv,
            returncode=process.returncode,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
        )
        logger.debug(f"{argv[1] if len(argv) > 1 else argv[0]} exited with {result.returncode}")
        return result

    @async_log_call
    async def version(self) -> str:
        """Return the sf version string, proving the CLI is usable."""
        result = await self.run("--version")
        if not result.ok:
            raise CliNotFoundError(details={"command": self.command, "stderr": result.stderr})
        return result.stdout.strip()

    @async_log_call
    async def org_display(self, cwd: Path) -> Dict[str, Any]:
        """Return the default org's session details for ``cwd``.

        Raises:
            MalformedSessionError: output was not a JSON document
            SessionNotFoundError: no default org, or no usable token in it
        """
        result = await self.run("org", "display", "--json", cwd=cwd)
        payload = extract_json(result.stdout)

        if payload is None:
            raise MalformedSessionError(details={"stderr": result.stderr.strip()})

        org = payload.get("result")
        if not isinstance(org, dict) or not org.get("accessToken") or not org.get("instanceUrl"):
            message = SessionNotFoundError.user_message
            if payload.get("message"):
                message = f"{message} ({payload['message']})"
            raise SessionNotFoundError(message=message, details={"status": payload.get("status")})

        return org

    @async_log_call
    async def retrieve(self, export_type: str, full_name: str, cwd: Path) -> CommandResult:
        """Retrieve one component into the SFDX project rooted at ``cwd``."""
        return await self.run(
            "project", "retrieve", "start",
            "--metadata", f"{export_type}:{full_name}",
            "--json",
            cwd=cwd,
        )

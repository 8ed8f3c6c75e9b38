"""
Engine Channels

A channel is a bidirectional, line-oriented text connection to a UCI engine.
The session driver only talks to this interface, so the engine can live in a
local subprocess, behind a socket, or be a scripted fake in tests.
"""

import asyncio
import logging
import shutil
from abc import ABC, abstractmethod
from typing import Optional

logger = logging.getLogger(__name__)


class EngineChannel(ABC):
    """
    Abstract text-line channel to an engine.

    Methods:
        send(command): Write one command line to the engine
        readline(): Next line from the engine, None at end of stream
        close(): Release the channel
    """

    @abstractmethod
    async def send(self, command: str) -> None:
        pass

    @abstractmethod
    async def readline(self) -> Optional[str]:
        pass

    @abstractmethod
    async def close(self) -> None:
        pass


class SubprocessChannel(EngineChannel):
    """Channel to an engine running as a local asyncio subprocess."""

    def __init__(self, process: asyncio.subprocess.Process):
        self.process = process

    @classmethod
    async def open(cls, engine_path: str) -> "SubprocessChannel":
        """
        Start the engine binary.

        Args:
            engine_path: Path or command name of the engine

        Raises:
            FileNotFoundError: If the binary cannot be found
        """
        resolved = shutil.which(engine_path)
        if resolved is None:
            raise FileNotFoundError(
                f"Engine binary not found: {engine_path}\n"
                "Install with: brew install stockfish (macOS) or apt install stockfish (Linux)"
            )

        process = await asyncio.create_subprocess_exec(
            resolved,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.DEVNULL,
        )
        logger.debug(f"Started engine {resolved} (pid={process.pid})")
        return cls(process)

    async def send(self, command: str) -> None:
        self.process.stdin.write((command + "\n").encode())
        await self.process.stdin.drain()

    async def readline(self) -> Optional[str]:
        data = await self.process.stdout.readline()
        if not data:
            return None
        return data.decode(errors="replace").strip()

    async def close(self) -> None:
        if self.process.returncode is not None:
            return

        if not self.process.stdin.is_closing():
            self.process.stdin.close()

        try:
            await asyncio.wait_for(self.process.wait(), timeout=1.0)
        except asyncio.TimeoutError:
            logger.warning(f"Engine pid={self.process.pid} did not exit, killing it")
            self.process.kill()
            await self.process.wait()

"""Bridge to the evaluation engine running as a child process."""

from __future__ import annotations

import asyncio
import codecs
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence, Set

from .exceptions import DispatchError
from .job.encoder import Submission
from .run.events import DONE_EVENT, LOG_EVENT, EventChannel

logger = logging.getLogger("PromptEvaluator.engine")

READ_CHUNK_SIZE = 4096
TERMINATE_TIMEOUT_S = 30.0


def default_output_path(output_dir: Path, now: Optional[datetime] = None) -> Path:
    """Return the NDJSON file the engine writes results to."""

    moment = now or datetime.now(timezone.utc)
    return output_dir / f"output-{moment.strftime('%Y-%m-%d_%H-%M-%S')}.ndjson"


class SubprocessEngine:
    """Runs the engine executable and republishes its output as events.

    Dispatch spawns ``<command> [--use-gpu] --show-output --output <file> run -``
    and writes the submission to stdin. Stdout and stderr are forwarded as
    ``log`` events; once the process exits the content of the output file is
    emitted as the single ``done`` event of the run.
    """

    def __init__(
        self,
        command: Sequence[str],
        events: EventChannel,
        *,
        output_dir: Path = Path("."),
        use_gpu: bool = False,
    ) -> None:
        if not command:
            raise ValueError("Engine command must not be empty")
        self.command = list(command)
        self.events = events
        self.output_dir = output_dir
        self.use_gpu = use_gpu
        self._processes: Set[asyncio.subprocess.Process] = set()
        self._tasks: Set[asyncio.Task[None]] = set()

    def build_command(self, output_path: Path) -> List[str]:
        args = ["--show-output", "--output", str(output_path), "run", "-"]
        if self.use_gpu:
            args.insert(0, "--use-gpu")
        return [*self.command, *args]

    async def dispatch(self, submission: Submission) -> None:
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DispatchError(f"Unable to create output directory {self.output_dir}: {exc}") from exc
        output_path = default_output_path(self.output_dir)
        command = self.build_command(output_path)
        logger.info("Starting engine: %s", " ".join(command))
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise DispatchError(f"Unable to start engine {command[0]!r}: {exc}") from exc

        self._processes.add(process)
        try:
            assert process.stdin is not None
            process.stdin.write(json.dumps(submission, ensure_ascii=False).encode("utf-8"))
            await process.stdin.drain()
            process.stdin.close()
        except OSError as exc:
            logger.warning("Engine did not accept the job", extra={"error": str(exc)})
            # No events for a run that never started.
            await self._stop(process)
            raise DispatchError(f"Engine exited before accepting the job: {exc}") from exc

        self._track(process, output_path)

    async def _stop(self, process: asyncio.subprocess.Process) -> None:
        if process.returncode is None:
            process.terminate()
            try:
                await asyncio.wait_for(process.wait(), timeout=TERMINATE_TIMEOUT_S)
            except asyncio.TimeoutError:
                process.kill()
                await process.wait()
        self._processes.discard(process)

    def _track(self, process: asyncio.subprocess.Process, output_path: Path) -> None:
        task = asyncio.get_running_loop().create_task(self._pump(process, output_path))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _pump(self, process: asyncio.subprocess.Process, output_path: Path) -> None:
        assert process.stdout is not None and process.stderr is not None
        try:
            await asyncio.gather(
                self._forward(process.stdout),
                self._forward(process.stderr),
            )
            returncode = await process.wait()
            if returncode != 0:
                logger.warning("Engine exited with a failure", extra={"returncode": returncode})
            else:
                logger.info("Engine finished", extra={"output_path": str(output_path)})
        finally:
            self._processes.discard(process)
            self.events.emit(DONE_EVENT, self._read_output(output_path))

    async def _forward(self, stream: asyncio.StreamReader) -> None:
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        while True:
            chunk = await stream.read(READ_CHUNK_SIZE)
            if not chunk:
                break
            text = decoder.decode(chunk)
            if text:
                self.events.emit(LOG_EVENT, text)
        tail = decoder.decode(b"", final=True)
        if tail:
            self.events.emit(LOG_EVENT, tail)

    @staticmethod
    def _read_output(output_path: Path) -> str:
        try:
            return output_path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.warning(
                "Engine output file unavailable",
                extra={"output_path": str(output_path), "error": str(exc)},
            )
            return ""

    async def aclose(self) -> None:
        """Terminate engine processes that are still running."""

        for process in list(self._processes):
            await self._stop(process)
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)


__all__ = ["SubprocessEngine", "default_output_path"]

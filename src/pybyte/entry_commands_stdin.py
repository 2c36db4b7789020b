import asyncio
from dataclasses import dataclass
from typing import BinaryIO, Callable, List, Optional

from pybyte.compiler import StdinTooLarge, compile_code
from pybyte.core.constants import STDIN_FILENAME
from pybyte.core.settings import Settings, settings as default_settings
from pybyte.core.utils.logging import get_logger
from pybyte.entry_command_context import CommandContext

logger = get_logger("pybyte.stdin")

CompileCodeFn = Callable[[str, Optional[str], bool], bytes]


@dataclass(frozen=True)
class StdinRequest:
    filename: str = STDIN_FILENAME
    compile_as_module: bool = True


class StdinCompiler:
    """Accumulates stdin chunk by chunk, then compiles the whole text once.

    Reads are awaited through the event loop's executor so the loop yields
    between chunks. The accumulator is capped by ``STDIN_MAX_BYTES``.
    """

    def __init__(
        self,
        request: StdinRequest,
        compile_fn: Optional[CompileCodeFn] = None,
        settings_obj: Optional[Settings] = None,
    ):
        cfg = settings_obj or default_settings
        self.request = request
        self._compile_fn = compile_fn or compile_code
        self._chunk_size = max(1, cfg.STDIN_CHUNK_SIZE)
        self._max_bytes = cfg.STDIN_MAX_BYTES
        self._chunks: List[bytes] = []
        self._size = 0

    @property
    def size(self) -> int:
        return self._size

    def on_data(self, chunk: bytes | None) -> None:
        if not chunk:
            return
        self._size += len(chunk)
        if self._max_bytes and self._size > self._max_bytes:
            raise StdinTooLarge(self._max_bytes)
        self._chunks.append(chunk)

    def on_end(self) -> bytes:
        code = b"".join(self._chunks).decode("utf-8")
        logger.debug("stdin complete", size=self._size, filename=self.request.filename)
        return self._compile_fn(code, self.request.filename, self.request.compile_as_module)

    async def consume(self, stream: BinaryIO) -> bytes:
        loop = asyncio.get_running_loop()
        read = getattr(stream, "read1", stream.read)
        while True:
            chunk = await loop.run_in_executor(None, read, self._chunk_size)
            if not chunk:
                break
            self.on_data(chunk)
        return self.on_end()


def compile_stdin(
    request: StdinRequest,
    command_ctx: CommandContext,
    compile_fn: Optional[CompileCodeFn] = None,
    settings_obj: Optional[Settings] = None,
) -> int:
    compiler = StdinCompiler(request, compile_fn=compile_fn, settings_obj=settings_obj)
    try:
        data = asyncio.run(compiler.consume(command_ctx.stdin))
    except Exception as e:
        logger.debug("stdin compile failed", error=str(e))
        command_ctx.print_err(str(e))
        return 1
    command_ctx.write_bytes(data)
    return 0

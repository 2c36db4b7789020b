import os
import sys
from dataclasses import dataclass, field
from typing import BinaryIO, Mapping, TextIO


def _binary_stdin() -> BinaryIO:
    return getattr(sys.stdin, "buffer", sys.stdin)


def _binary_stdout() -> BinaryIO:
    return getattr(sys.stdout, "buffer", sys.stdout)


@dataclass
class CommandContext:
    """Process streams and environment handed to every mode."""

    stdin: BinaryIO = field(default_factory=_binary_stdin)
    stdout: TextIO = field(default_factory=lambda: sys.stdout)
    stdout_binary: BinaryIO = field(default_factory=_binary_stdout)
    stderr: TextIO = field(default_factory=lambda: sys.stderr)
    environ: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))

    def print_line(self, text: str) -> None:
        print(text, file=self.stdout)

    def print_err(self, text: str) -> None:
        print(text, file=self.stderr)

    def write_bytes(self, data: bytes) -> None:
        self.stdout.flush()
        self.stdout_binary.write(data)
        self.stdout_binary.flush()

    def child_env(self, **extra: str) -> dict:
        env = dict(self.environ)
        env.update(extra)
        return env

import dataclasses
import enum
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from pybyte.core.constants import (
    FLAG_COMPILE,
    FLAG_HELP,
    FLAG_USE,
    FLAG_VERSION,
    SHORT_FLAGS,
)

ENTRY_POINT = str(Path(__file__).resolve().parent / "__main__.py")


class Mode(str, enum.Enum):
    DELEGATE = "delegate"
    HELP = "help"
    VERSION = "version"
    COMPILE = "compile"
    DEFAULT_RUN = "default-run"


def is_flag_like(token: str) -> bool:
    return token.startswith("-")


def is_file_token(token: str) -> bool:
    return not token.startswith("-") and token[1:2] != "-"


def canonicalize(tokens: Iterable[str]) -> List[str]:
    """Expand short flags to their long form, one token for one, order kept."""
    return [SHORT_FLAGS.get(tok, tok) for tok in tokens]


@dataclass(frozen=True)
class ProgramContext:
    self_path: str
    runtime_executable: str
    args: Tuple[str, ...]
    flags: Tuple[str, ...]
    files: Tuple[str, ...]
    # Tokens as received, before canonicalization.
    argv: Tuple[str, ...] = ()

    def has_flag(self, flag: str) -> bool:
        return flag in self.flags

    def argument_index(self, flag: str) -> Optional[int]:
        """Index of the token right after ``flag`` if it can serve as its argument."""
        if flag not in self.args:
            return None
        idx = self.args.index(flag) + 1
        if idx >= len(self.args):
            return None
        token = self.args[idx]
        if not token or is_flag_like(token):
            return None
        return idx

    def without(self, *indices: int) -> "ProgramContext":
        """Copy with the tokens at ``indices`` dropped from ``files``."""
        skip = set(indices)
        files = tuple(tok for i, tok in enumerate(self.args) if i not in skip and is_file_token(tok))
        return dataclasses.replace(self, files=files)


def parse_invocation(
    argv: Sequence[str],
    self_path: Optional[str] = None,
    runtime_executable: Optional[str] = None,
) -> ProgramContext:
    argv = tuple(argv)
    args = tuple(canonicalize(argv))
    return ProgramContext(
        self_path=self_path or ENTRY_POINT,
        runtime_executable=runtime_executable or sys.executable,
        args=args,
        flags=tuple(tok for tok in args if is_flag_like(tok)),
        files=tuple(tok for tok in args if is_file_token(tok)),
        argv=argv,
    )


def select_mode(ctx: ProgramContext) -> Mode:
    if ctx.has_flag(FLAG_USE):
        return Mode.DELEGATE
    if not ctx.files and len(ctx.flags) == 1:
        if ctx.flags[0] == FLAG_HELP:
            return Mode.HELP
        if ctx.flags[0] == FLAG_VERSION:
            return Mode.VERSION
    if ctx.has_flag(FLAG_COMPILE):
        return Mode.COMPILE
    return Mode.DEFAULT_RUN

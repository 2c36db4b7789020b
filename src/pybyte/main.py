import sys
from typing import List

from pybyte.core.constants import FLAG_USE
from pybyte.core.utils.logging import configure_logging, get_logger
from pybyte.entry_bootstrap import Mode, ProgramContext, parse_invocation, select_mode
from pybyte.entry_command_context import CommandContext
from pybyte.entry_commands import cmd_help, cmd_version
from pybyte.entry_commands_compile import run_compile
from pybyte.entry_commands_delegate import delegate_to_executable, delegate_with_loader

logger = get_logger("pybyte.main")

USE_USAGE = "--use flag expects the next argument to be the path of a Python executable."

_RUNTIME_BOOTSTRAPPED = False


def _bootstrap_runtime() -> None:
    global _RUNTIME_BOOTSTRAPPED
    if _RUNTIME_BOOTSTRAPPED:
        return
    configure_logging()
    _RUNTIME_BOOTSTRAPPED = True


def _run_use(ctx: ProgramContext, command_ctx: CommandContext) -> int:
    idx = ctx.argument_index(FLAG_USE)
    if idx is None:
        command_ctx.print_err(USE_USAGE)
        return 1
    executable = ctx.args[idx]
    rest = [tok for i, tok in enumerate(ctx.args) if i not in (idx - 1, idx)]
    return delegate_to_executable(executable, ctx, rest, command_ctx)


def dispatch(ctx: ProgramContext, command_ctx: CommandContext) -> int:
    mode = select_mode(ctx)
    logger.debug("mode selected", mode=mode.value, args=list(ctx.args))

    if mode is Mode.DELEGATE:
        return _run_use(ctx, command_ctx)
    if mode is Mode.HELP:
        return cmd_help(command_ctx)
    if mode is Mode.VERSION:
        return cmd_version(command_ctx)
    if mode is Mode.COMPILE:
        return run_compile(ctx, command_ctx)
    return delegate_with_loader(ctx, command_ctx)


def main(argv: List[str] | None = None, command_ctx: CommandContext | None = None) -> int:
    _bootstrap_runtime()
    argv = list(sys.argv[1:] if argv is None else argv)
    ctx = parse_invocation(argv)
    return dispatch(ctx, command_ctx or CommandContext())

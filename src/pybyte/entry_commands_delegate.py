import subprocess
from typing import List, Sequence

from pybyte.core.constants import LOADER_MODULE, RUN_AS_SCRIPT_ENV
from pybyte.core.utils.logging import get_logger
from pybyte.entry_bootstrap import ProgramContext
from pybyte.entry_command_context import CommandContext

logger = get_logger("pybyte.delegate")


def exit_status(returncode: int) -> int:
    """Map a child's return code to a shell exit status (signal N -> 128+N)."""
    if returncode < 0:
        return 128 - returncode
    return returncode


def _spawn(cmd: List[str], env: dict, command_ctx: CommandContext) -> int:
    logger.debug("spawning child", cmd=cmd)
    try:
        proc = subprocess.run(cmd, env=env, check=False)
    except OSError as e:
        command_ctx.print_err(str(e))
        return 1
    logger.debug("child exited", returncode=proc.returncode)
    return exit_status(proc.returncode)


def delegate_to_executable(
    executable: str,
    ctx: ProgramContext,
    args: Sequence[str],
    command_ctx: CommandContext,
) -> int:
    cmd = [executable, ctx.self_path, *args]
    env = command_ctx.child_env(**{RUN_AS_SCRIPT_ENV: "1"})
    return _spawn(cmd, env, command_ctx)


def delegate_with_loader(ctx: ProgramContext, command_ctx: CommandContext) -> int:
    cmd = [ctx.runtime_executable, "-m", LOADER_MODULE, *ctx.argv]
    return _spawn(cmd, command_ctx.child_env(), command_ctx)

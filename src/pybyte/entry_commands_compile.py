from typing import List, Optional

from pybyte.compiler import CompileOptions, compile as compile_file, compile_files
from pybyte.core.constants import (
    FLAG_FILENAME,
    FLAG_LOADER,
    FLAG_NO_MODULE,
    FLAG_OUTPUT,
    STDIN_FILENAME,
    STDIN_SENTINEL,
)
from pybyte.core.utils.logging import get_logger
from pybyte.entry_bootstrap import ProgramContext
from pybyte.entry_command_context import CommandContext
from pybyte.entry_commands_stdin import StdinRequest, compile_stdin

logger = get_logger("pybyte.compile")


def _consume_argument(ctx: ProgramContext, flag: str, consumed: List[int]) -> Optional[str]:
    if not ctx.has_flag(flag):
        return None
    idx = ctx.argument_index(flag)
    if idx is None:
        return None
    consumed.append(idx)
    return ctx.args[idx]


def _compile_batch(files: List[str], options: CompileOptions, command_ctx: CommandContext) -> int:
    try:
        outcomes = compile_files(options.model_copy(update={"files": files}))
    except Exception as e:
        command_ctx.print_err(str(e))
        return 1
    failed = [outcome for outcome in outcomes if not outcome.ok]
    for outcome in failed:
        command_ctx.print_err(str(outcome))
    logger.info("batch compiled", total=len(outcomes), failed=len(failed))
    return 0


def _compile_single(filename: str, options: CompileOptions, command_ctx: CommandContext) -> int:
    try:
        result = compile_file(options.model_copy(update={"filename": filename}))
    except Exception as e:
        command_ctx.print_err(str(e))
        return 1
    logger.info("compiled", path=result.path, output=result.output, loader=result.loader)
    return 0


def run_compile(ctx: ProgramContext, command_ctx: CommandContext) -> int:
    compile_as_module = not ctx.has_flag(FLAG_NO_MODULE)
    create_loader = ctx.has_flag(FLAG_LOADER)

    # Flag arguments don't start with a dash, so they were classified as files.
    consumed: List[int] = []
    loader_pattern = _consume_argument(ctx, FLAG_LOADER, consumed)
    output = _consume_argument(ctx, FLAG_OUTPUT, consumed)
    filename = None
    if ctx.has_flag(STDIN_SENTINEL):
        # --filename only names stdin; without "-" its argument stays a file.
        filename = _consume_argument(ctx, FLAG_FILENAME, consumed)
    files = list(ctx.without(*consumed).files)

    options = CompileOptions(
        compile_as_module=compile_as_module,
        create_loader=create_loader,
        loader_pattern=loader_pattern,
        output=output,
    )

    if len(files) > 1:
        rc = _compile_batch(files, options, command_ctx)
    elif files:
        rc = _compile_single(files[0], options, command_ctx)
    else:
        rc = 0
    if rc != 0:
        return rc

    if ctx.has_flag(STDIN_SENTINEL):
        request = StdinRequest(filename=filename or STDIN_FILENAME, compile_as_module=compile_as_module)
        return compile_stdin(request, command_ctx)
    return 0

import builtins
import importlib.util
import logging
import marshal
from pathlib import Path
from types import CodeType
from typing import Dict, List, Optional

from pybyte.compiler.loader_file import check_loader_path, write_loader
from pybyte.compiler.models import (
    CompileFailure,
    CompileOptions,
    CompileOutcome,
    CompileSuccess,
    CompilerError,
)
from pybyte.core.constants import HEADER_FLAGS, HEADER_SIZE, STDIN_FILENAME
from pybyte.core.settings import Settings, settings as default_settings

logger = logging.getLogger("pybyte.compiler")

MAGIC = importlib.util.MAGIC_NUMBER


def _header() -> bytes:
    return MAGIC + HEADER_FLAGS.to_bytes(4, "little") + bytes(8)


def compile_source(code: str, filename: str, settings_obj: Optional[Settings] = None) -> CodeType:
    cfg = settings_obj or default_settings
    try:
        return builtins.compile(code, filename, "exec", dont_inherit=True, optimize=cfg.OPTIMIZE)
    except (SyntaxError, ValueError) as e:
        raise CompilerError("ERR_SYNTAX", str(e)) from e


def compile_code(
    code: str,
    filename: Optional[str] = None,
    compile_as_module: bool = True,
    settings_obj: Optional[Settings] = None,
) -> bytes:
    """Compile source text to artifact bytes.

    Module artifacts carry an unchecked-hash pyc header so the stock
    importlib loaders accept them; the bare form is only runnable through
    ``pybyte.loader``.
    """
    co = compile_source(code, filename or STDIN_FILENAME, settings_obj)
    body = marshal.dumps(co)
    if compile_as_module:
        return _header() + body
    return body


def read_artifact(source: bytes | str | Path) -> CodeType:
    if isinstance(source, (str, Path)):
        try:
            data = Path(source).read_bytes()
        except OSError as e:
            raise CompilerError("ERR_READ", str(e)) from e
    else:
        data = bytes(source)

    if data[:4] == MAGIC:
        body = data[HEADER_SIZE:]
    elif data[2:4] == b"\r\n":
        raise CompilerError(
            "ERR_VERSION",
            "artifact was compiled by a different Python version",
            hint="recompile it with the interpreter that will run it",
        )
    else:
        body = data

    try:
        co = marshal.loads(body)
    except (EOFError, ValueError, TypeError) as e:
        raise CompilerError("ERR_FORMAT", f"not a bytecode artifact: {e}") from e
    if not isinstance(co, CodeType):
        raise CompilerError("ERR_FORMAT", "not a bytecode artifact")
    return co


def _read_source(src: Path) -> str:
    try:
        return src.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CompilerError("ERR_READ", str(e)) from e


def _compile_one(src: Path, out: Path, options: CompileOptions, cfg: Settings) -> CompileSuccess:
    if out.resolve() == src.resolve():
        raise CompilerError("ERR_OUTPUT", f"{out} would overwrite its own source")
    pattern = options.loader_pattern or cfg.LOADER_PATTERN
    if options.create_loader:
        # Nothing is written when the loader would land on the source.
        check_loader_path(out, pattern, src)
    data = compile_code(_read_source(src), str(src), options.compile_as_module, cfg)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(data)

    loader = None
    if options.create_loader:
        loader = write_loader(out, pattern, src)
    logger.debug("Compiled %s -> %s (%d bytes)", src, out, len(data))
    return CompileSuccess(path=str(src), output=str(out), loader=str(loader) if loader else None)


def compile(options: CompileOptions, settings_obj: Optional[Settings] = None) -> CompileSuccess:
    cfg = settings_obj or default_settings
    if not options.filename:
        raise CompilerError("ERR_READ", "no input file given")
    src = Path(options.filename)
    out = Path(options.output) if options.output else src.with_suffix(cfg.ARTIFACT_SUFFIX)
    return _compile_one(src, out, options, cfg)


def compile_files(options: CompileOptions, settings_obj: Optional[Settings] = None) -> List[CompileOutcome]:
    """Compile every file in ``options.files``; failures become outcomes, not exceptions.

    Each artifact is written at most once per call: a second file mapping to
    an output already produced (same stem under ``--output``) fails instead
    of replacing the first.
    """
    cfg = settings_obj or default_settings
    out_dir = Path(options.output) if options.output else None
    outcomes: List[CompileOutcome] = []
    written: Dict[Path, str] = {}
    for name in options.files:
        src = Path(name)
        if out_dir is not None:
            out = out_dir / (src.stem + cfg.ARTIFACT_SUFFIX)
        else:
            out = src.with_suffix(cfg.ARTIFACT_SUFFIX)
        key = out.resolve()
        if key in written:
            logger.debug("Output clash for %s: %s already written for %s", name, out, written[key])
            outcomes.append(CompileFailure(
                path=name,
                error=f"{out} is already the output of {written[key]}",
                code="ERR_OUTPUT",
            ))
            continue
        try:
            outcomes.append(_compile_one(src, out, options, cfg))
        except CompilerError as e:
            logger.debug("Compile failed for %s: [%s] %s", name, e.code, e.message)
            outcomes.append(CompileFailure(path=name, error=e.message, code=e.code))
            continue
        except OSError as e:
            logger.debug("Write failed for %s: %s", name, e)
            outcomes.append(CompileFailure(path=name, error=str(e), code="ERR_WRITE"))
            continue
        written[key] = name
    return outcomes

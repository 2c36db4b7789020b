"""Companion module preloaded with ``python -m pybyte.loader``.

Installs an import hook for bytecode artifacts, then either runs the file
named on the command line or opens an interactive console where artifacts
can be imported like regular modules.
"""
import builtins
import code
import importlib.machinery
import runpy
import sys
import types
from pathlib import Path
from typing import List, Optional, Sequence

from pybyte import __version__
from pybyte.compiler import CompilerError, read_artifact
from pybyte.compiler.artifact import MAGIC
from pybyte.core.settings import Settings, settings as default_settings
from pybyte.core.utils.logging import configure_logging, get_logger

logger = get_logger("pybyte.loader")

_hook = None


class ArtifactLoader(importlib.machinery.SourcelessFileLoader):
    """Imports module artifacts; bare (--no-module) artifacts are rejected."""

    def get_code(self, fullname):
        data = self.get_data(self.path)
        if data[:4] != MAGIC and data[2:4] != b"\r\n":
            raise ImportError(
                f"{self.path} was compiled without module support and can only be run",
                name=fullname,
                path=self.path,
            )
        try:
            return read_artifact(data)
        except CompilerError as e:
            raise ImportError(f"{self.path}: {e.message}", name=fullname, path=self.path) from e


def _loader_details(suffix: str) -> list:
    return [
        (importlib.machinery.ExtensionFileLoader, importlib.machinery.EXTENSION_SUFFIXES),
        (importlib.machinery.SourceFileLoader, importlib.machinery.SOURCE_SUFFIXES),
        (importlib.machinery.SourcelessFileLoader, importlib.machinery.BYTECODE_SUFFIXES),
        (ArtifactLoader, [suffix]),
    ]


def is_installed() -> bool:
    return _hook is not None and _hook in sys.path_hooks


def install(settings_obj: Optional[Settings] = None) -> None:
    global _hook
    if is_installed():
        return
    cfg = settings_obj or default_settings
    _hook = importlib.machinery.FileFinder.path_hook(*_loader_details(cfg.ARTIFACT_SUFFIX))
    sys.path_hooks.insert(0, _hook)
    sys.path_importer_cache.clear()
    logger.debug("artifact import hook installed", suffix=cfg.ARTIFACT_SUFFIX)


def uninstall() -> None:
    global _hook
    if _hook is None:
        return
    if _hook in sys.path_hooks:
        sys.path_hooks.remove(_hook)
    sys.path_importer_cache.clear()
    _hook = None


def exec_artifact(path: str | Path, namespace: dict) -> dict:
    """Execute an artifact inside ``namespace`` (used by generated loader files)."""
    co = read_artifact(path)
    namespace.setdefault("__builtins__", builtins)
    exec(co, namespace)
    return namespace


def run_artifact(path: str | Path, argv: Sequence[str] = ()) -> types.ModuleType:
    path = str(path)
    co = read_artifact(path)
    module = types.ModuleType("__main__")
    module.__file__ = path
    module.__builtins__ = builtins

    saved_main = sys.modules.get("__main__")
    saved_argv = sys.argv
    sys.modules["__main__"] = module
    sys.argv = [path, *argv]
    try:
        exec(co, module.__dict__)
    finally:
        sys.argv = saved_argv
        if saved_main is not None:
            sys.modules["__main__"] = saved_main
    return module


def _run_file(target: str, rest: List[str], cfg: Settings) -> int:
    path = Path(target)
    if not path.is_file():
        print(f"pybyte: can't open file {target!r}: no such file", file=sys.stderr)
        return 2
    # Same sys.path[0] an interpreter gives a script.
    sys.path.insert(0, str(path.resolve().parent))
    if path.suffix == cfg.ARTIFACT_SUFFIX:
        run_artifact(target, rest)
        return 0
    saved_argv = sys.argv
    sys.argv = [target, *rest]
    try:
        runpy.run_path(target, run_name="__main__")
    finally:
        sys.argv = saved_argv
    return 0


def _interact() -> None:
    banner = (
        f"pybyte {__version__} | Python {sys.version.split()[0]}\n"
        "Bytecode artifacts on sys.path can be imported directly."
    )
    code.interact(banner=banner, local={"__name__": "__console__"}, exitmsg="")


def main(argv: Optional[List[str]] = None, settings_obj: Optional[Settings] = None) -> int:
    cfg = settings_obj or default_settings
    argv = list(sys.argv[1:] if argv is None else argv)
    configure_logging(cfg)
    install(cfg)

    idx = 0
    while idx < len(argv) and argv[idx].startswith("-"):
        idx += 1
    if idx:
        logger.warning("ignoring options before the script", options=argv[:idx])

    if idx < len(argv):
        return _run_file(argv[idx], argv[idx + 1:], cfg)

    _interact()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

import os
from pathlib import Path

from pybyte.compiler.models import CompilerError
from pybyte.core.constants import LOADER_PLACEHOLDER

LOADER_TEMPLATE = '''\
import os

from pybyte.loader import exec_artifact

exec_artifact(os.path.join(os.path.dirname(os.path.abspath(__file__)), {artifact!r}), globals())
'''


def loader_path_for(artifact: str | Path, pattern: str) -> Path:
    """Resolve a loader pattern against an artifact.

    Every ``%`` in the pattern becomes the artifact name without its suffix.
    Relative results are placed next to the artifact.
    """
    artifact = Path(artifact)
    name = pattern.replace(LOADER_PLACEHOLDER, artifact.stem)
    return artifact.parent / name


def check_loader_path(artifact: str | Path, pattern: str, source: str | Path | None = None) -> Path:
    """Return the loader path for ``artifact``, refusing to clobber the artifact or its source."""
    artifact = Path(artifact)
    path = loader_path_for(artifact, pattern)
    target = path.resolve()
    if target == artifact.resolve():
        raise CompilerError("ERR_OUTPUT", f"loader pattern {pattern!r} resolves to the artifact itself")
    if source is not None and target == Path(source).resolve():
        raise CompilerError("ERR_OUTPUT", f"loader {path} would overwrite its own source")
    return path


def write_loader(artifact: str | Path, pattern: str, source: str | Path | None = None) -> Path:
    artifact = Path(artifact)
    path = check_loader_path(artifact, pattern, source)
    rel = Path(os.path.relpath(artifact.resolve(), path.parent.resolve())).as_posix()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(LOADER_TEMPLATE.format(artifact=rel), encoding="utf-8")
    return path

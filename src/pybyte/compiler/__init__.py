from .artifact import compile, compile_code, compile_files, read_artifact
from .loader_file import loader_path_for, write_loader
from .models import (
    CompileFailure,
    CompileOptions,
    CompileOutcome,
    CompileSuccess,
    CompilerError,
    StdinTooLarge,
)

__all__ = [
    "compile",
    "compile_code",
    "compile_files",
    "read_artifact",
    "loader_path_for",
    "write_loader",
    "CompileFailure",
    "CompileOptions",
    "CompileOutcome",
    "CompileSuccess",
    "CompilerError",
    "StdinTooLarge",
]

"""
Centralized constants for pybyte.

CLI flag names, the artifact header layout and the delegation
environment live here so the entry modules and the compiler agree.
"""

# ============================================================================
# CLI Flags
# ============================================================================

FLAG_HELP = "--help"
FLAG_VERSION = "--version"
FLAG_COMPILE = "--compile"
FLAG_NO_MODULE = "--no-module"
FLAG_LOADER = "--loader"
FLAG_OUTPUT = "--output"
FLAG_USE = "--use"
FLAG_FILENAME = "--filename"

STDIN_SENTINEL = "-"
"""Bare dash meaning "read source from standard input"."""

SHORT_FLAGS = {
    "-h": FLAG_HELP,
    "-v": FLAG_VERSION,
    "-c": FLAG_COMPILE,
    "-n": FLAG_NO_MODULE,
    "-l": FLAG_LOADER,
}
"""Short form -> canonical long form."""


# ============================================================================
# Delegation
# ============================================================================

RUN_AS_SCRIPT_ENV = "ELECTRON_RUN_AS_NODE"
"""Set on the --use child so embedding runtimes behave as a plain interpreter."""

LOADER_MODULE = "pybyte.loader"
"""Module preloaded with -m in default-run mode."""


# ============================================================================
# Artifacts
# ============================================================================

DEFAULT_ARTIFACT_SUFFIX = ".pybc"
DEFAULT_LOADER_PATTERN = "%.loader.py"
LOADER_PLACEHOLDER = "%"

HEADER_SIZE = 16
"""Magic (4) + flags (4) + two reserved words (8), as in an unchecked-hash pyc."""

HEADER_FLAGS = 0b01
"""Hash-based pyc with check_source disabled: importlib never revalidates it."""

STDIN_FILENAME = "<stdin>"

import sys
from importlib import metadata

from pybyte import __version__
from pybyte.entry_command_context import CommandContext

DIST_NAME = "pybyte"

USAGE = """
    Usage: pybyte [option] [ FILE... | - ] [arguments]

    Options:
      -h, --help                        show help information.
      -v, --version                     show pybyte version.

          --use     [ EXECUTABLE ]      use this Python executable instead of the current one.

      -c, --compile [ FILE... | - ]     compile stdin, a file, or a list of files.
      -n, --no-module                   compile without the module header (run-only artifacts).

      -l, --loader  [ FILE | PATTERN ]  create a loader file and optionally define
                                        loader filename or pattern using % as filename replacer.
                                        defaults to %.loader.py

          --output  [ PATH ]            artifact path for one file, output directory for several.
          --filename [ NAME ]           source name recorded when compiling stdin.

    Examples:

    $ pybyte -c script.py               compile `script.py` to `script.pybc`.
    $ pybyte -c src/*.py                compile all `.py` files in `src/` directory.

    $ pybyte -c ./*.py -l %.load.py     create `filename.load.py` loader files alongside `.pybc` files

    $ pybyte script.pybc [arguments]    run `script.pybc` with arguments.

    $ pybyte                            open a Python console where `.pybc` files can be imported directly.

    $ echo 'print("Hello")' | pybyte --compile - > hello.pybc
                                        compile from stdin and save to `hello.pybc`.

    $ pybyte -c main.py --use /opt/venv/bin/python
                                        use another interpreter to compile `main.py`."""


def package_version() -> str:
    try:
        return metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        return __version__


def runtime_version() -> str:
    return sys.version.split()[0]


def cmd_help(command_ctx: CommandContext) -> int:
    command_ctx.print_line(USAGE)
    return 0


def cmd_version(command_ctx: CommandContext) -> int:
    command_ctx.print_line(f"pybyte {package_version()} | Python {runtime_version()}")
    return 0

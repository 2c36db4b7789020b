import io

import pytest

from pybyte.core.utils.logging import configure_logging


@pytest.fixture(autouse=True, scope="session")
def _logging():
    configure_logging()


@pytest.fixture
def command_ctx():
    from pybyte.entry_command_context import CommandContext

    return CommandContext(
        stdin=io.BytesIO(),
        stdout=io.StringIO(),
        stdout_binary=io.BytesIO(),
        stderr=io.StringIO(),
        environ={"PATH": "/usr/bin", "HOME": "/home/tester"},
    )

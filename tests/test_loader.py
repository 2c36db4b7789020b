import importlib
import sys

import pytest

from pybyte import loader
from pybyte.compiler import CompileOptions, compile, compile_code


@pytest.fixture
def hook():
    loader.install()
    yield loader
    loader.uninstall()


def _artifact(tmp_path, name, source, **kwargs):
    src = tmp_path / f"{name}.py"
    src.write_text(source, encoding="utf-8")
    result = compile(CompileOptions(filename=str(src), **kwargs))
    src.unlink()
    return result.output


def test_install_is_idempotent_and_reversible():
    before = list(sys.path_hooks)
    loader.install()
    loader.install()
    try:
        assert loader.is_installed()
        assert len(sys.path_hooks) == len(before) + 1
    finally:
        loader.uninstall()
    assert not loader.is_installed()
    assert sys.path_hooks == before


def test_install_restores_a_hook_removed_from_path_hooks():
    before = list(sys.path_hooks)
    loader.install()
    try:
        sys.path_hooks.remove(loader._hook)
        assert not loader.is_installed()
        loader.install()
        assert loader.is_installed()
        assert len(sys.path_hooks) == len(before) + 1
    finally:
        loader.uninstall()
    assert sys.path_hooks == before


def test_installed_hook_imports_module_artifacts(tmp_path, monkeypatch, hook):
    _artifact(tmp_path, "pybyte_hooked_mod", "VALUE = 42\n")
    monkeypatch.syspath_prepend(str(tmp_path))
    sys.path_importer_cache.clear()
    try:
        mod = importlib.import_module("pybyte_hooked_mod")
        assert mod.VALUE == 42
        assert mod.__file__.endswith(".pybc")
    finally:
        sys.modules.pop("pybyte_hooked_mod", None)


def test_bare_artifacts_cannot_be_imported(tmp_path, monkeypatch, hook):
    _artifact(tmp_path, "pybyte_bare_mod", "VALUE = 1\n", compile_as_module=False)
    monkeypatch.syspath_prepend(str(tmp_path))
    sys.path_importer_cache.clear()
    try:
        with pytest.raises(ImportError, match="can only be run"):
            importlib.import_module("pybyte_bare_mod")
    finally:
        sys.modules.pop("pybyte_bare_mod", None)


def test_run_artifact_runs_as_main_with_argv(tmp_path):
    path = tmp_path / "script.pybc"
    path.write_bytes(compile_code(
        "import sys\nRESULT = (__name__, list(sys.argv))\n", "script.py", compile_as_module=False,
    ))
    saved_argv = list(sys.argv)

    module = loader.run_artifact(path, ["--flag", "x"])

    assert module.RESULT == ("__main__", [str(path), "--flag", "x"])
    assert sys.argv == saved_argv
    assert sys.modules["__main__"] is not module


def test_exec_artifact_populates_namespace(tmp_path):
    path = tmp_path / "lib.pybc"
    path.write_bytes(compile_code("def double(x):\n    return x * 2\n", "lib.py"))
    ns = loader.exec_artifact(path, {"__name__": "lib"})
    assert ns["double"](21) == 42


def test_main_runs_artifact_given_on_command_line(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(sys, "path", list(sys.path))
    path = _artifact(tmp_path, "hello", "import sys\nprint('hello', *sys.argv[1:])\n")
    try:
        rc = loader.main([path, "world"])
    finally:
        loader.uninstall()
    assert rc == 0
    assert capsys.readouterr().out == "hello world\n"


def test_main_runs_plain_source_too(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(sys, "path", list(sys.path))
    script = tmp_path / "plain.py"
    script.write_text("print('plain')\n", encoding="utf-8")
    try:
        rc = loader.main([str(script)])
    finally:
        loader.uninstall()
    assert rc == 0
    assert capsys.readouterr().out == "plain\n"


def test_main_missing_file_exits_two(tmp_path, capsys):
    try:
        rc = loader.main([str(tmp_path / "nope.pybc")])
    finally:
        loader.uninstall()
    assert rc == 2
    assert "can't open file" in capsys.readouterr().err


def test_main_without_files_opens_console(monkeypatch):
    calls = []
    monkeypatch.setattr(loader.code, "interact", lambda **kwargs: calls.append(kwargs))
    try:
        rc = loader.main([])
        assert loader.is_installed()
    finally:
        loader.uninstall()
    assert rc == 0
    assert "pybyte" in calls[0]["banner"]

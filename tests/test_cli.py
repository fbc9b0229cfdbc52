# -*- coding: utf-8 -
#
# This file is part of daemonpid released under the MIT license.
# See the NOTICE for more information.

import io
import os

import pytest

from daemonpid import cli
from daemonpid.cli import PidfileApp

from conftest import FakeProcesses


def write(path, content):
    with open(str(path), "w") as f:
        f.write(content)


def run_app(args, processes):
    out = io.StringIO()
    code = PidfileApp(prog="daemonpid", processes=processes,
                      stdout=out).run(args)
    return code, out.getvalue().splitlines()


def test_list(tmp_path):
    write(tmp_path / "app0.pid", "100\n")
    write(tmp_path / "app1.pid", "200\n")
    procs = FakeProcesses(pid=1, alive=[200])

    code, lines = run_app(["list", "app", "--dir", str(tmp_path)], procs)

    assert code == cli.EXIT_OK
    assert lines == [
        "%s\t100\tdead" % os.path.join(str(tmp_path), "app0.pid"),
        "%s\t200\trunning" % os.path.join(str(tmp_path), "app1.pid"),
    ]
    assert os.path.exists(str(tmp_path / "app0.pid"))


def test_list_reap(tmp_path):
    write(tmp_path / "app0.pid", "100\n")
    write(tmp_path / "app1.pid", "200\n")
    procs = FakeProcesses(pid=1, alive=[200])

    code, lines = run_app(["--reap", "list", "app", "--dir", str(tmp_path)],
                          procs)

    assert code == cli.EXIT_OK
    assert lines == [
        "%s\t200\trunning" % os.path.join(str(tmp_path), "app1.pid")]
    assert not os.path.exists(str(tmp_path / "app0.pid"))


def test_locate(tmp_path):
    write(tmp_path / "app0.pid", "100\n")
    procs = FakeProcesses(pid=1)

    code, lines = run_app(["locate", "app", "--dir", str(tmp_path)], procs)
    assert code == cli.EXIT_OK
    assert lines == [os.path.join(str(tmp_path), "app.pid")]

    code, lines = run_app(["locate", "app", "--multiple",
                           "--dir", str(tmp_path)], procs)
    assert lines == [os.path.join(str(tmp_path), "app1.pid")]


def test_show(tmp_path):
    path = str(tmp_path / "svc.pid")
    write(path, "300\n")
    code, lines = run_app(["show", path], FakeProcesses(pid=300))
    assert code == cli.EXIT_OK
    assert lines == ["%s\t300\trunning" % path]


def test_show_no_pid(tmp_path):
    path = str(tmp_path / "svc.pid")
    write(path, "junk\n")
    code, lines = run_app(["show", path], FakeProcesses(pid=1))
    assert code == cli.EXIT_NO_PID
    assert lines == ["%s\t-\tno pid" % path]


def test_error_exit_code(tmp_path, capsys):
    code, lines = run_app(["list", "app", "--dir-mode", "script"],
                          FakeProcesses(pid=1))
    assert code == cli.EXIT_ERROR
    assert lines == []
    assert "script" in capsys.readouterr().err


def test_bad_command():
    with pytest.raises(SystemExit):
        run_app(["stop", "app"], FakeProcesses(pid=1))


def test_run_exits(tmp_path, monkeypatch):
    monkeypatch.setattr(cli, "PidfileApp",
                        lambda: PidfileApp(processes=FakeProcesses(pid=1),
                                           stdout=io.StringIO()))
    with pytest.raises(SystemExit) as exc:
        cli.run(["locate", "app", "--dir", str(tmp_path)])
    assert exc.value.code == 0

# -*- coding: utf-8 -
#
# This file is part of daemonpid released under the MIT license.
# See the NOTICE for more information.

"""\
A pid file is a plain text file holding the pid of a running daemon on
its first line (for example ``6432``), stored at a well known location so
that other programs can find the daemon and signal it.

Pid files are named ``<progname><number>.pid``. The number is left out
when only one instance of the program may run at any time.

Nothing here locks anything. Picking a free instance number and cleaning
up are both check-then-act: two processes started at the same instant may
pick the same number, and the last one to write wins the file.

Writing truncates the file before its mode is set, so a write that fails
on the chmod (a file owned by another user) leaves the record empty.
"""

import logging
import os
import re

from daemonpid import process
from daemonpid.errors import (ConfigError, InstanceLimitExceeded,
                              WriteFailure, AlreadyRunning)

# instance numbers run from 0 to MAX_INSTANCES - 1
MAX_INSTANCES = 1024

SYSTEM_PID_DIR = "/var/run"

DIR_MODES = ("normal", "script", "system")

PIDFILE_MODE = 0o644

# largest value a pid_t can hold
MAX_PID = 2 ** 31 - 1

PID_RE = re.compile(r"[0-9]+")

log = logging.getLogger("daemonpid.error")


class Pidfile(object):
    """\
    Manage a pid file at a path that is already known, e.g. one found by
    :func:`daemonpid.scanner.find_files`.
    """

    def __init__(self, fname, processes=None):
        self._fname = fname
        self.processes = processes or process.default_table

    @staticmethod
    def existing(path, processes=None):
        return Pidfile(path, processes=processes)

    @property
    def path(self):
        return self._fname

    fname = path

    def __repr__(self):
        return "<%s %s>" % (self.__class__.__name__, self.path)

    def exists(self):
        """ True if a regular, readable file is at `path` """
        try:
            return (os.path.isfile(self.path)
                    and os.access(self.path, os.R_OK))
        except (OSError, ValueError):
            return False

    def read(self):
        """\
        Return the pid stored in the file, or None if the file is missing,
        unreadable, empty, or holds something that is not a positive
        number in the pid range. A half written file reads as None.
        """
        try:
            with open(self.path, "r") as f:
                line = f.readline()
        except (OSError, UnicodeDecodeError, ValueError):
            return None

        line = line.strip()
        if not PID_RE.fullmatch(line):
            return None
        pid = int(line)
        # otherwise an invalid pid file becomes pid 0
        if pid <= 0 or pid > MAX_PID:
            return None
        return pid

    def write(self, pid):
        """ Write `pid`, creating or truncating the file """
        if (not isinstance(pid, int) or isinstance(pid, bool)
                or pid <= 0 or pid > MAX_PID):
            raise ValueError("invalid pid: %r" % (pid,))

        fdir = os.path.dirname(self.path)
        if fdir and not os.path.isdir(fdir):
            raise WriteFailure(self.path, "%s doesn't exist" % fdir)

        try:
            with open(self.path, "w") as f:
                os.chmod(self.path, PIDFILE_MODE)
                f.write("%s\n" % pid)
        except OSError as e:
            raise WriteFailure(self.path, e.strerror or str(e)) from e

    pid = property(lambda self: self.read(),
                   lambda self, value: self.write(value))

    def validate(self):
        """ Return the stored pid if that process is alive, else None """
        pid = self.read()
        if pid is None:
            return None
        if self.processes.is_alive(pid):
            return pid
        return None

    def create(self, pid):
        """\
        Write `pid` unless another live process already owns the file.
        A stale file is overwritten.
        """
        oldpid = self.validate()
        if oldpid:
            if oldpid == self.processes.current_pid():
                return
            raise AlreadyRunning(oldpid, self.path)
        self.write(pid)

    def cleanup(self):
        """\
        Delete the file, but only if it still names the calling process.
        Never raises.
        """
        pid = self.read()
        if pid is None or pid != self.processes.current_pid():
            return False
        try:
            os.unlink(self.path)
        except OSError as e:
            log.debug("Can't remove pidfile %s: %s", self.path, e)
            return False
        return True


class LocatedPidfile(Pidfile):
    """\
    A pid file whose path is derived from a directory, a program name and,
    when several instances may run, the lowest free instance number.

    Picking the number only reserves a name; no file is created until
    :meth:`write` is called.
    """

    def __init__(self, dir, progname, multiple=False, processes=None):
        self.dir = os.path.abspath(os.path.expanduser(dir))
        self.progname = progname
        self.multiple = multiple
        self.number = None

        if multiple:
            self.number = 0
            while (os.path.exists(self._derive())
                   and self.number < MAX_INSTANCES):
                self.number += 1
            if self.number >= MAX_INSTANCES:
                raise InstanceLimitExceeded(progname, MAX_INSTANCES)

        super(LocatedPidfile, self).__init__(self._derive(),
                                             processes=processes)

    def _derive(self):
        number = "" if self.number is None else "%d" % self.number
        return os.path.join(self.dir, "%s%s.pid" % (self.progname, number))


def locate(dir, progname, multiple=False, processes=None):
    return LocatedPidfile(dir, progname, multiple=multiple,
                          processes=processes)


def pid_dir(dir_mode, dir=None, script=None):
    """\
    Resolve the directory pid files live in.

    :param dir_mode: ``normal`` uses `dir` as given, ``script`` takes `dir`
        relative to the directory of `script`, ``system`` uses /var/run.
    """
    if dir_mode == "system":
        return SYSTEM_PID_DIR
    if dir_mode == "normal":
        return os.path.abspath(os.path.expanduser(dir or "."))
    if dir_mode == "script":
        if not script:
            raise ConfigError("dir_mode 'script' needs a script path")
        base = os.path.dirname(os.path.abspath(script))
        return os.path.abspath(os.path.join(base, dir or "."))
    raise ConfigError("Invalid dir_mode: %r (expected one of %s)" % (
        dir_mode, ", ".join(DIR_MODES)))

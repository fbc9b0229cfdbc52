# -*- coding: utf-8 -
#
# This file is part of daemonpid released under the MIT license.
# See the NOTICE for more information.

import glob
import logging
import os

from daemonpid import process
from daemonpid.pidfile import Pidfile

log = logging.getLogger("daemonpid.error")


def _readable_file(path):
    return os.path.isfile(path) and os.access(path, os.R_OK)


def find_files(dir, progname, reap=False, processes=None):
    """\
    Return the pid files in `dir` whose names start with `progname` and end
    with ``.pid``, sorted.

    With `reap`, files naming a process that is no longer alive are deleted
    and left out of the result. A file without a valid pid counts as dead.
    Failing to delete a file is not an error.
    """
    processes = processes or process.default_table

    pattern = os.path.join(glob.escape(dir), "%s*.pid" % glob.escape(progname))
    files = [f for f in sorted(glob.glob(pattern)) if _readable_file(f)]
    if not reap:
        return files

    alive = []
    for fname in files:
        pid = Pidfile(fname, processes=processes).read() or 0
        if processes.is_alive(pid):
            alive.append(fname)
            continue

        log.info("pid-file for killed process %s found (%s), deleting.",
                 pid, fname)
        try:
            os.unlink(fname)
        except OSError as e:
            log.debug("Can't remove pidfile %s: %s", fname, e)
    return alive


def find_records(dir, progname, reap=False, processes=None):
    return [Pidfile(f, processes=processes)
            for f in find_files(dir, progname, reap=reap,
                                processes=processes)]

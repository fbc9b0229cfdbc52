# -*- coding: utf-8 -
#
# This file is part of daemonpid released under the MIT license.
# See the NOTICE for more information.

import errno
import os


class ProcessTable(object):
    """\
    Answers the two questions a pid file needs from the host: who am I,
    and is a given pid still running. Pass another object with the same
    two methods to work against a fake process table.
    """

    def current_pid(self):
        return os.getpid()

    def is_alive(self, pid):
        # signal 0 to pid 0 (or below) addresses a process group
        if not pid or pid <= 0:
            return False
        try:
            os.kill(pid, 0)
        except OverflowError:
            # too large for pid_t, cannot name a process
            return False
        except OSError as e:
            if e.errno == errno.ESRCH:    # no such process
                return False
            if e.errno == errno.EPERM:    # exists, owned by someone else
                return True
            raise
        return True


default_table = ProcessTable()


def current_pid():
    return default_table.current_pid()


def is_alive(pid):
    return default_table.is_alive(pid)

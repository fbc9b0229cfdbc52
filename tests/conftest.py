# -*- coding: utf-8 -
#
# This file is part of daemonpid released under the MIT license.
# See the NOTICE for more information.

import logging

import pytest


class FakeProcesses(object):
    """ A process table where we decide who is alive """

    def __init__(self, pid=1234, alive=()):
        self.pid = pid
        self.alive = set(alive)

    def current_pid(self):
        return self.pid

    def is_alive(self, pid):
        return pid == self.pid or pid in self.alive


@pytest.fixture
def processes():
    return FakeProcesses()


@pytest.fixture(autouse=True)
def reset_error_log():
    yield
    log = logging.getLogger("daemonpid.error")
    for h in list(log.handlers):
        log.removeHandler(h)
    log.propagate = True
    log.setLevel(logging.NOTSET)

# -*- coding: utf-8 -
#
# This file is part of daemonpid released under the MIT license.
# See the NOTICE for more information.


class PidfileError(Exception):
    """ Base class for every failure raised by daemonpid """


class InstanceLimitExceeded(PidfileError):
    """ No free instance number is left for a program """

    def __init__(self, progname, limit):
        self.progname = progname
        self.limit = limit

    def __str__(self):
        return "cannot run more than %d instances of %r" % (
            self.limit, self.progname)


class WriteFailure(PidfileError):
    """ The pid file could not be written """

    def __init__(self, path, reason=None):
        self.path = path
        self.reason = reason

    def __str__(self):
        msg = "Can't write pidfile %s" % self.path
        if self.reason:
            msg = "%s: %s" % (msg, self.reason)
        return msg


class AlreadyRunning(PidfileError):

    def __init__(self, pid, path):
        self.pid = pid
        self.path = path

    def __str__(self):
        return "Already running on PID %s (or pid file '%s' is stale)" % (
            self.pid, self.path)


class ConfigError(PidfileError):
    """ Exception raised on config error """

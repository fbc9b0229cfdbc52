# -*- coding: utf-8 -
#
# This file is part of daemonpid released under the MIT license.
# See the NOTICE for more information.

import argparse
import copy
import os
import shlex
import sys
import textwrap

from daemonpid import __version__, util
from daemonpid.errors import ConfigError
from daemonpid.glogging import Logger
from daemonpid.pidfile import DIR_MODES, pid_dir

KNOWN_SETTINGS = []

ENV_ARGS = "DAEMONPID_CMD_ARGS"


def make_settings(ignore=None):
    settings = {}
    ignore = ignore or ()
    for s in KNOWN_SETTINGS:
        setting = s()
        if setting.name in ignore:
            continue
        settings[setting.name] = setting.copy()
    return settings


class Config(object):

    def __init__(self, usage=None, prog=None):
        self.settings = make_settings()
        self.usage = usage
        self.prog = prog or os.path.basename(sys.argv[0])

    def __getattr__(self, name):
        if name not in self.settings:
            raise AttributeError("No configuration setting for: %s" % name)
        return self.settings[name].get()

    def __setattr__(self, name, value):
        if name != "settings" and name in self.settings:
            raise AttributeError("Invalid access!")
        super(Config, self).__setattr__(name, value)

    def set(self, name, value):
        if name not in self.settings:
            raise AttributeError("No configuration setting for: %s" % name)
        self.settings[name].set(value)

    def parser(self):
        kwargs = {
            "usage": self.usage,
            "prog": self.prog
        }
        parser = argparse.ArgumentParser(**kwargs)
        parser.add_argument("-v", "--version",
                            action="version", default=argparse.SUPPRESS,
                            version="%(prog)s (version " + __version__ + ")\n",
                            help="show program's version number and exit")

        keys = sorted(self.settings, key=self.settings.__getitem__)
        for k in keys:
            self.settings[k].add_option(parser)

        return parser

    def parse_args(self, parser, args=None):
        """\
        Parse `args`, with anything found in DAEMONPID_CMD_ARGS placed in
        front so that the command line wins.
        """
        if args is None:
            args = sys.argv[1:]
        env_args = shlex.split(os.environ.get(ENV_ARGS, ""))
        opts = parser.parse_args(env_args + list(args))

        for k, v in vars(opts).items():
            if v is None or k not in self.settings:
                continue
            self.set(k.lower(), v)
        return opts

    @property
    def logger_class(self):
        uri = self.settings["logger_class"].get()
        if uri == "simple":
            uri = "daemonpid.glogging.Logger"
        return util.load_class(uri)

    @property
    def pid_dir(self):
        return pid_dir(self.dir_mode, dir=self.dir, script=self.script)


class SettingMeta(type):
    def __new__(cls, name, bases, attrs):
        super_new = super().__new__
        parents = [b for b in bases if isinstance(b, SettingMeta)]
        if not parents:
            return super_new(cls, name, bases, attrs)

        attrs["order"] = len(KNOWN_SETTINGS)
        attrs["validator"] = staticmethod(attrs["validator"])

        new_class = super_new(cls, name, bases, attrs)
        new_class.fmt_desc(attrs.get("desc", ""))
        KNOWN_SETTINGS.append(new_class)
        return new_class

    def fmt_desc(cls, desc):
        desc = textwrap.dedent(desc).strip()
        setattr(cls, "desc", desc)
        setattr(cls, "short", desc.splitlines()[0])


class Setting(object):
    name = None
    value = None
    section = None
    cli = None
    validator = None
    type = None
    meta = None
    action = None
    default = None
    short = None
    desc = None
    nargs = None
    const = None

    def __init__(self):
        if self.default is not None:
            self.set(self.default)

    def add_option(self, parser):
        if not self.cli:
            return
        args = tuple(self.cli)

        help_txt = "%s [%s]" % (self.short, self.default)
        help_txt = help_txt.replace("%", "%%")

        kwargs = {
            "dest": self.name,
            "action": self.action or "store",
            "type": self.type or str,
            "default": None,
            "help": help_txt
        }

        if self.meta is not None:
            kwargs["metavar"] = self.meta

        if kwargs["action"] != "store":
            kwargs.pop("type")

        if self.nargs is not None:
            kwargs["nargs"] = self.nargs

        if self.const is not None:
            kwargs["const"] = self.const

        parser.add_argument(*args, **kwargs)

    def copy(self):
        return copy.copy(self)

    def get(self):
        return self.value

    def set(self, val):
        if not callable(self.validator):
            raise TypeError('Invalid validator: %s' % self.name)
        self.value = self.validator(val)

    def __lt__(self, other):
        return (self.section == other.section and
                self.order < other.order)

    def __repr__(self):
        return "<%s.%s object at %x with value %r>" % (
            self.__class__.__module__,
            self.__class__.__name__,
            id(self),
            self.value,
        )


Setting = SettingMeta('Setting', (Setting,), {})


def validate_bool(val):
    if val is None:
        return

    if isinstance(val, bool):
        return val
    if not isinstance(val, str):
        raise ConfigError("Invalid type for casting: %s" % val)
    if val.lower().strip() == "true":
        return True
    elif val.lower().strip() == "false":
        return False
    else:
        raise ConfigError("Invalid boolean: %s" % val)


def validate_string(val):
    if val is None:
        return None
    if not isinstance(val, str):
        raise ConfigError("Not a string: %s" % val)
    return val.strip()


def validate_dir_mode(val):
    val = validate_string(val)
    if val not in DIR_MODES:
        raise ConfigError("Invalid dir_mode: %r (expected one of %s)" % (
            val, ", ".join(DIR_MODES)))
    return val


def validate_loglevel(val):
    val = validate_string(val).lower()
    if val not in Logger.LOG_LEVELS:
        raise ConfigError("Invalid log level: %r" % val)
    return val


class PidDir(Setting):
    name = "dir"
    section = "Pid Files"
    cli = ["--dir"]
    meta = "DIR"
    validator = validate_string
    default = "."
    desc = """\
        Directory holding the pid files.

        Interpreted according to ``dir_mode``.
        """


class DirMode(Setting):
    name = "dir_mode"
    section = "Pid Files"
    cli = ["--dir-mode"]
    meta = "MODE"
    validator = validate_dir_mode
    default = "normal"
    desc = """\
        Where ``dir`` is anchored: normal, script or system.

        * ``normal`` - ``dir`` as given, relative to the working directory
        * ``script`` - ``dir`` relative to the directory of ``script``
        * ``system`` - /var/run, ``dir`` is ignored
        """


class Script(Setting):
    name = "script"
    section = "Pid Files"
    cli = ["--script"]
    meta = "PATH"
    validator = validate_string
    default = None
    desc = """\
        Path of the daemonized script, used by the ``script`` dir mode.
        """


class Multiple(Setting):
    name = "multiple"
    section = "Pid Files"
    cli = ["--multiple"]
    validator = validate_bool
    action = "store_true"
    default = False
    desc = """\
        Allow several instances of the program, numbering their pid files.
        """


class Reap(Setting):
    name = "reap"
    section = "Pid Files"
    cli = ["--reap"]
    validator = validate_bool
    action = "store_true"
    default = False
    desc = """\
        Delete pid files whose process is no longer running.
        """


class LoggerClass(Setting):
    name = "logger_class"
    section = "Logging"
    cli = ["--logger-class"]
    meta = "STRING"
    validator = validate_string
    default = "daemonpid.glogging.Logger"
    desc = """\
        The logger you want to use to log events.

        Must be a dotted path to a class with the interface of
        ``daemonpid.glogging.Logger``.
        """


class ErrorLog(Setting):
    name = "errorlog"
    section = "Logging"
    cli = ["--error-logfile", "--log-file"]
    meta = "FILE"
    validator = validate_string
    default = "-"
    desc = """\
        The Error log file to write to.

        Using ``'-'`` for FILE makes daemonpid log to stderr.
        """


class Loglevel(Setting):
    name = "loglevel"
    section = "Logging"
    cli = ["--log-level"]
    meta = "LEVEL"
    validator = validate_loglevel
    default = "info"
    desc = """\
        The granularity of Error log outputs.

        Valid level names are:

        * debug
        * info
        * warning
        * error
        * critical
        """

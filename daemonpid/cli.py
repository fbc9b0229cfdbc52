# -*- coding: utf-8 -
#
# This file is part of daemonpid released under the MIT license.
# See the NOTICE for more information.

import sys

from colorama import Fore, Style

from daemonpid import util
from daemonpid.config import Config
from daemonpid.errors import PidfileError
from daemonpid.pidfile import Pidfile, locate
from daemonpid.process import default_table
from daemonpid.scanner import find_files

USAGE = "%(prog)s [OPTIONS] {list,locate,show} TARGET"

EXIT_OK = 0
EXIT_NO_PID = 1
EXIT_ERROR = 2


class PidfileApp(object):
    """\
    Inspect pid files from outside the daemons that own them: list them,
    reap the stale ones, show where the next instance would go.
    """

    COMMANDS = ("list", "locate", "show")

    def __init__(self, usage=USAGE, prog=None, processes=None,
                 stdout=None):
        self.usage = usage
        self.prog = prog
        self.processes = processes or default_table
        self.stdout = stdout or sys.stdout
        self.cfg = None
        self.log = None
        self.command = None
        self.target = None

    def load_config(self, args=None):
        self.cfg = Config(self.usage, prog=self.prog)

        parser = self.cfg.parser()
        parser.add_argument("command", choices=self.COMMANDS)
        parser.add_argument("target", metavar="TARGET",
                            help="program name, or a pid file path for show")
        opts = self.cfg.parse_args(parser, args)

        self.command = opts.command
        self.target = opts.target
        self.log = self.cfg.logger_class(self.cfg)

    def run(self, args=None):
        try:
            self.load_config(args)
            handler = getattr(self, "handle_%s" % self.command)
            return handler()
        except PidfileError as e:
            if self.log is None:
                print("Error: %s" % e, file=sys.stderr)
            else:
                self.log.error("%s", e)
            return EXIT_ERROR

    def handle_list(self):
        pid_dir = self.cfg.pid_dir
        self.log.debug("Scanning %s for %s pid files", pid_dir, self.target)
        for fname in find_files(pid_dir, self.target, reap=self.cfg.reap,
                                processes=self.processes):
            self.echo_status(Pidfile(fname, processes=self.processes))
        return EXIT_OK

    def handle_locate(self):
        pidfile = locate(self.cfg.pid_dir, self.target,
                         multiple=self.cfg.multiple,
                         processes=self.processes)
        self.echo(pidfile.path)
        return EXIT_OK

    def handle_show(self):
        pidfile = Pidfile.existing(self.target, processes=self.processes)
        if self.echo_status(pidfile) is None:
            return EXIT_NO_PID
        return EXIT_OK

    def echo_status(self, pidfile):
        pid = pidfile.read()
        if pid is None:
            status = self.paint("no pid", Fore.YELLOW)
        elif self.processes.is_alive(pid):
            status = self.paint("running", Fore.GREEN)
        else:
            status = self.paint("dead", Fore.RED)
        self.echo("%s\t%s\t%s" % (pidfile.path, "-" if pid is None else pid,
                                   status))
        return pid

    def paint(self, text, color):
        if not util.isatty(self.stdout):
            return text
        return "%s%s%s" % (color, text, Style.RESET_ALL)

    def echo(self, line):
        print(line, file=self.stdout)


def run(args=None):
    """\
    The ``daemonpid`` command line runner.
    """
    sys.exit(PidfileApp().run(args))


if __name__ == "__main__":
    run()

# -*- coding: utf-8 -
#
# This file is part of daemonpid released under the MIT license.
# See the NOTICE for more information.

import importlib
import inspect
import sys
import traceback

from daemonpid.errors import ConfigError


def load_class(uri, default="daemonpid.glogging.Logger"):
    if inspect.isclass(uri):
        return uri

    if not uri:
        uri = default

    components = uri.split(".")
    if len(components) == 1:
        raise ConfigError("class uri %r invalid or not found" % uri)

    klass = components.pop(-1)
    try:
        mod = importlib.import_module(".".join(components))
    except Exception:
        exc = traceback.format_exc()
        msg = "class uri %r invalid or not found: \n\n[%s]"
        raise ConfigError(msg % (uri, exc))

    try:
        return getattr(mod, klass)
    except AttributeError:
        raise ConfigError("class %r not found in %s" % (klass, mod.__name__))


def isatty(stream=None):
    stream = stream or sys.stdout
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False

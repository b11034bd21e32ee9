"""
egetopt front end: the `egetopt` program.

Usage
    egetopt optstring parameters
    egetopt [options] [--] optstring parameters
    egetopt [options] -o|--options optstring [options] [--] parameters

The program's own options are classified by the same Scanner it offers to shell
scripts (short spec "+ao:l:n:qQs:TuhV" plus the long table below), then the
parameters are scanned with the collected Session and the normalized line is
written to stdout:

    eval set -- "$(egetopt -o ab:c:: --long alpha,beta:,gamma:: -- "$@")"

Compatibility
- When the first parameter does not start with '-', or GETOPT_COMPATIBLE is set in
  the environment, the first parameter is the short spec (leading '-'/'+' removed),
  output is unquoted and no long options exist.

Short specs handed to the scanner always carry an ordering prefix: "+" is added
unless the option string already starts with "+" or "-".

Exit codes are the ExitCode members (0 ok, 1 classification error, 2 usage,
3 internal, 4 for -T).
"""
import os
import sys
from collections import defaultdict

from rich.console import Console
from rich.table import Table
from rich.text import Text

from . import __version__
from .faults import *
from .quoting import Shell
from .scanner import Scanner, ShortOpt, LongOpt, Operand, Terminator, Error
from .session import Session
from .tables import OptionTable
from .utils import Unset, coalesce

_SHORTOPTS = "+ao:l:n:qQs:TuhV"
_LONGOPTS = "options:,longoptions:,quiet,quiet-output,shell:,test,unquoted,help,alternative,name:,version"
_LETTERS = {
    "options": "o",
    "longoptions": "l",
    "quiet": "q",
    "quiet-output": "Q",
    "shell": "s",
    "test": "T",
    "unquoted": "u",
    "help": "h",
    "alternative": "a",
    "name": "n",
    "version": "V",
}

# (names, metavar, description) in the order the help lists them
_OPTIONS = (
    ("-a, --alternative", "", "allow long options starting with single -"),
    ("-h, --help", "", "this small usage guide"),
    ("-l, --longoptions", "<longopts>", "long options to be recognized"),
    ("-n, --name", "<progname>", "the name under which errors are reported"),
    ("-o, --options", "<optstring>", "short options to be recognized"),
    ("-q, --quiet", "", "disable error reporting by getopt(3)"),
    ("-Q, --quiet-output", "", "no normal output"),
    ("-s, --shell", "<shell>", "set shell quoting conventions"),
    ("-T, --test", "", "test for getopt(1) version"),
    ("-u, --unquoted", "", "do not quote the output"),
    ("-V, --version", "", "output version information"),
)


def _ordered(optstring):
    return optstring if optstring.startswith(("+", "-")) else "+" + optstring


def _helper(prog, *, colorful=False):
    """
    Render the usage guide on stderr.

    Palette keys
    - usage-label, program-name, option-name, metavar, description
    Define a mapping named __styles__ in __main__ to override any entry.
    """
    console = Console(stderr=True, highlight=False)
    styles = defaultdict(str, {
        "usage-label": "bold #00E6FF",  # CYAN → section headers
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "option-name": "bold #22C55E",  # GREEN for option names
        "metavar": "bold #FFD600",  # AMBER for parameters
        "description": "#9CA3AF",  # Muted gray
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    console.print()
    console.print(Text("Usage:", styler("usage-label")))
    for usage in (
            "optstring parameters",
            "[options] [--] optstring parameters",
            "[options] -o|--options optstring [options] [--] parameters",
    ):
        console.print(Text.assemble(" ", (prog, styler("program-name")), " ", usage), soft_wrap=True)

    console.print()
    console.print(Text("Options:", styler("usage-label")))
    table = Table.grid(padding=(0, 1))
    table.add_column()
    table.add_column()
    for names, metavar, description in _OPTIONS:
        table.add_row(
            Text.assemble(" ", (names, styler("option-name")), " ", (metavar, styler("metavar"))),
            Text(description, styler("description")),
        )
    console.print(table)
    console.print()


def _emit(session, optstring, args, stdout):
    output = session.run(_ordered(optstring), args)
    stdout.write(output.line)
    return output.status


def _main(argv, environ, stdout, prog):
    compatible = "GETOPT_COMPATIBLE" in environ

    if len(argv) < 2:
        if compatible:
            # the historical getopt gave no error without parameters
            stdout.write(" --\n")
            return ExitCode.OK
        raise MissingOptstringError("missing optstring argument", code=FaultCode.MISSING_OPTSTRING)

    if compatible or not argv[1].startswith("-"):
        return _emit(Session(quote=False), argv[1].lstrip("-+"), [argv[0], *argv[2:]], stdout)

    config = {}
    table = OptionTable()
    optstring = name = Unset
    params = []

    for element in Scanner(_SHORTOPTS, OptionTable(_LONGOPTS), argv):
        match element:
            case Error():
                trigger(element.fault(), prog=prog, shell=True, deferred=True)
                raise UsageError(code=FaultCode.BAD_USAGE)
            case Operand(text):
                params.append(text)
                continue
            case Terminator():
                continue
            case ShortOpt(letter, value):
                pass
            case LongOpt(_, option, value):
                letter = _LETTERS[option]

        match letter:
            case "a":
                config["alternative"] = True
            case "h":
                _helper(prog)
                return ExitCode.PARAMETER
            case "o":
                optstring = value
            case "l":
                table.parse(value)
            case "n":
                name = value
            case "q":
                config["quiet_errors"] = True
            case "Q":
                config["quiet_output"] = True
            case "s":
                config["shell"] = Shell.from_name(value)
            case "T":
                return ExitCode.TEST
            case "u":
                config["quote"] = False
            case "V":
                stdout.write("%s %s\n" % (prog, __version__))
                return ExitCode.OK

    if optstring is Unset:
        if not params:
            raise MissingOptstringError("missing optstring argument", code=FaultCode.MISSING_OPTSTRING)
        optstring, *params = params

    return _emit(Session(table=table, **config), optstring, [coalesce(name, argv[0]), *params], stdout)


def main(argv=Unset, /, *, environ=Unset, stdout=Unset):
    """
    Run egetopt and return its exit status.

    Parameters
    - argv: Sequence[str] (defaults to sys.argv); argv[0] is the program name.
    - environ: Mapping[str, str] (defaults to os.environ); only GETOPT_COMPATIBLE is read.
    - stdout: text stream receiving the normalized line (defaults to sys.stdout).
    """
    argv = list(coalesce(argv, sys.argv))
    environ = coalesce(environ, os.environ)
    stdout = coalesce(stdout, sys.stdout)
    prog = os.path.basename(argv[0]) if argv else "egetopt"

    try:
        return _main(argv or [prog], environ, stdout, prog)
    except ConfigurationError as fault:
        trigger(fault, prog=prog, hint="Try '%s --help' for more information." % prog, shell=True, deferred=True)
        return fault.status
    except MemoryError:
        fault = AllocationError("out of memory", code=FaultCode.ALLOCATION)
        trigger(fault, prog=prog, shell=True, deferred=True)
        return fault.status


def run():
    """Console-script entry point."""
    sys.exit(main())


__all__ = (
    "main",
    "run",
)

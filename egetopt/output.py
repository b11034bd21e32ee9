"""
egetopt output: drive the scanner and format one shell-evaluable line.

Line layout
- " -x" for a short option, " --name" for a long option;
- options that take an argument are always followed by " <quoted argument>"; an
  absent optional argument is emitted as the quoted empty string so the caller can
  shift over option/argument pairs uniformly;
- operands reported in place (return-in-order specs) appear where they were found;
- " --" exactly once, then every remaining operand, then a newline.

Status
- ExitCode.OK when every token was classified, ExitCode.GETOPT otherwise.

Diagnostics
- each unclassifiable token is rendered on stderr as it is met, unless the session
  is quiet_errors or the short spec carries the ":" flag.
"""
from typing import NamedTuple

from .faults import ExitCode, trigger
from .scanner import ShortOpt, LongOpt, Operand, Terminator, Error
from .tables import Arity, Ordering, ShortSpec
from .utils import coalesce


class Output(NamedTuple):
    line: str
    status: ExitCode
    faults: tuple = ()


def generate_output(session, spec, args, /):
    """
    Scan `args` with `session` and build the output line.

    Parameters
    - session: Session
      quoting, dialect, mode, quiet flags and the long option table.
    - spec: ShortSpec | str
      short options, ordering prefix included.
    - args: Sequence[str]
      args[0] is the program name used in diagnostics (unless session.name is set).

    Returns
    - Output(line, status, faults): line is "" under quiet_output.
    """
    spec = spec if isinstance(spec, ShortSpec) else ShortSpec.parse(spec)
    quiet = session.quiet_errors or spec.silent
    prog = coalesce(session.name, args[0] if args else "egetopt")

    words = []
    faults = []
    terminated = False

    def argument(text):
        return session.normalize(text if text is not None else "")

    for element in session.scan(spec, args):
        match element:
            case Error():
                faults.append(fault := element.fault())
                if not quiet:
                    trigger(fault, prog=prog, shell=True, deferred=True, colorful=session.colorful)
            case ShortOpt(letter, value):
                words.append("-" + letter)
                if spec.arity(letter) is not Arity.NONE:
                    words.append(argument(value))
            case LongOpt(index, name, value):
                words.append("--" + name)
                if session.table[index].arity is not Arity.NONE:
                    words.append(argument(value))
            case Terminator():
                if not terminated:
                    words.append("--")
                    terminated = True
            case Operand(text):
                if not terminated and spec.ordering is not Ordering.RETURN_IN_ORDER:
                    words.append("--")
                    terminated = True
                words.append(session.normalize(text))

    if not terminated:
        words.append("--")

    status = ExitCode.GETOPT if faults else ExitCode.OK
    if session.quiet_output:
        return Output("", status, tuple(faults))
    return Output("".join(" " + word for word in words) + "\n", status, tuple(faults))


__all__ = (
    "Output",
    "generate_output",
)

"""
egetopt faults (errors) and rendering.

Scope
- FaultCode: stable numeric identifiers for every user-facing issue, grouped by
  domain (per-token classification, configuration, internal).
- ExitCode: the process exit statuses the front end selects from.
- GetoptException and its subclasses: carry a message plus options and know how
  to render themselves through rich.
- trigger(): central entry point to surface any fault (print or raise).

Two families
- Option faults (UnknownOptionError, AmbiguousOptionError, MissingArgumentError,
  UnexpectedArgumentError) describe one offending token. They never stop a scan;
  the output layer renders them and degrades the aggregate status to 1.
- Configuration faults (InvalidSpecError, UnknownShellError, MissingOptstringError,
  UsageError) abort a run before scanning starts and map to status 2.

Rendering
- Lines read "<prog>: <message>", followed by the hint (if any) on its own line,
  matching the wording shell scripts expect from getopt(1).
- When "colorful" is on, the palette below applies; a host program may override any
  entry with a __styles__ mapping in __main__.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console
from rich.text import Text

from .utils import Unset, UnsetType

console = Console(stderr=True, highlight=False)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - classification (211xx): UNKNOWN_OPTION, AMBIGUOUS_OPTION, MISSING_ARGUMENT,
      UNEXPECTED_ARGUMENT
    - configuration (221xx): INVALID_SPEC, UNKNOWN_SHELL, MISSING_OPTSTRING, BAD_USAGE
    - internal (231xx): ALLOCATION
    """
    # --- classification faults (211xx) ---
    UNKNOWN_OPTION      = 21101
    AMBIGUOUS_OPTION    = 21102
    MISSING_ARGUMENT    = 21103
    UNEXPECTED_ARGUMENT = 21104

    # --- configuration faults (221xx) ---
    INVALID_SPEC        = 22101
    UNKNOWN_SHELL       = 22102
    MISSING_OPTSTRING   = 22103
    BAD_USAGE           = 22104

    # --- internal faults (231xx) ---
    ALLOCATION          = 23101


class ExitCode(IntEnum):
    """
    process exit statuses.

    - OK: no errors, successful operation.
    - GETOPT: one or more tokens could not be classified.
    - PARAMETER: a problem with the parameters of egetopt itself.
    - ALLOCATION: internal error, out of memory.
    - TEST: returned for -T/--test.
    """
    OK         = 0
    GETOPT     = 1
    PARAMETER  = 2
    ALLOCATION = 3
    TEST       = 4


class GetoptException(Exception):
    """
    base fault: a message plus free-form options.

    recognized options
    - code: FaultCode of the fault.
    - prog: program name shown in front of the message.
    - hint: an extra line printed below the message.
    - shell: print instead of raising when triggered.
    - deferred: when printing, return instead of exiting.
    - colorful: apply the style palette.
    """
    status = ExitCode.GETOPT

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | UnsetType)
        super().__init__(message if message else "")
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "error-message": "#FF4DA6",  # friendly pinky message
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(__import__("__main__"), "__styles__", {}))

        def text(fragment, style):
            return Text(str(fragment), styles[style] if self.options.get("colorful") else "")

        lines = []
        if self.message:
            prog = self.options.get("prog", "egetopt")
            lines.append(Text.assemble(text(prog, "prog-name"), ": ", text(self.message, "error-message")))
        if self.options.get("hint"):
            lines.append(text(self.options["hint"], "hint"))
        return Text("\n").join(lines)

    def __trigger__(self) -> None:
        if not self.options.get("shell"):
            raise self from None
        console.print(self, soft_wrap=True)
        if self.options.get("deferred"):
            return
        sys.exit(self.status)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class OptionFault(GetoptException):
    """
    fault about one offending option.

    Subclasses carry getopt(3) wording: long_message for options spelled with a
    dash prefix kept in the input ("--foo", "-foo"), short_message for a letter.
    """
    status = ExitCode.GETOPT
    fault_code = None
    long_message = short_message = "%s"

    @classmethod
    def about(cls, option, /, long=True, **options):
        """build the fault naming `option`, worded for its long or short spelling."""
        template = cls.long_message if long else cls.short_message
        return cls(template % option, code=cls.fault_code, input=option, **options)


class UnknownOptionError(OptionFault):
    fault_code = FaultCode.UNKNOWN_OPTION
    long_message = "unrecognized option '%s'"
    short_message = "invalid option -- '%s'"


class AmbiguousOptionError(OptionFault):
    fault_code = FaultCode.AMBIGUOUS_OPTION

    @classmethod
    def about(cls, option, /, long=True, candidates=(), **options):
        candidates = tuple(candidates)
        return cls(
            "option '%s' is ambiguous; possibilities: %s" % (
                option, " ".join("'%s'" % candidate for candidate in candidates)
            ),
            code=cls.fault_code, input=option, candidates=candidates, **options,
        )


class MissingArgumentError(OptionFault):
    fault_code = FaultCode.MISSING_ARGUMENT
    long_message = "option '%s' requires an argument"
    short_message = "option requires an argument -- '%s'"


class UnexpectedArgumentError(OptionFault):
    fault_code = FaultCode.UNEXPECTED_ARGUMENT
    long_message = short_message = "option '%s' doesn't allow an argument"


class ConfigurationError(GetoptException):
    status = ExitCode.PARAMETER


class InvalidSpecError(ConfigurationError): ...
class UnknownShellError(ConfigurationError): ...
class MissingOptstringError(ConfigurationError): ...
class UsageError(ConfigurationError): ...


class AllocationError(GetoptException):
    status = ExitCode.ALLOCATION


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see GetoptException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - with shell=True the fault is printed on stderr (and the process exits unless
      deferred=True); otherwise it is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "ExitCode",
    "GetoptException",
    "OptionFault",
    "UnknownOptionError",
    "AmbiguousOptionError",
    "MissingArgumentError",
    "UnexpectedArgumentError",
    "ConfigurationError",
    "InvalidSpecError",
    "UnknownShellError",
    "MissingOptstringError",
    "UsageError",
    "AllocationError",
    "trigger",
)

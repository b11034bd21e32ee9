"""
egetopt scanner: classify an argument vector, one token at a time.

Elements
- ShortOpt(letter, argument): a recognized short option; argument is None when absent.
- LongOpt(index, name, argument): a recognized long option; index points into the
  OptionTable, name is the full table name (never the abbreviation typed).
- Operand(text): a non-option argument.
- Terminator(): the explicit "--" marker.
- Error(kind, option, ...): a token that could not be classified.

States
- OPTIONS (initial): tokens are classified as options, "--" or operands.
- OPERANDS: entered after "--", or after the first operand in require-order mode;
  every remaining token is an operand.

Token rules
- "--"                     → Terminator, then operands only.
- "--name[=value]"         → long option (exact or unambiguous abbreviation).
- "-abc"                   → bundled short options; a letter taking an argument
                             swallows the rest of the token, or (required only)
                             the next token.
- "-name" (alternative)    → tried as a long option first when it has more than one
                             character or its character is not a short option; an
                             unknown name falls back to short options.
- anything else, and "-"   → operand, handled per the ShortSpec ordering.

Errors never stop the scan; the next token is classified as usual.

Quick example:
    >>> from egetopt.tables import OptionTable
    >>> list(scan("+ab:c", OptionTable(), ["prog", "-abVALUE"]))
    [ShortOpt(letter='a', argument=None), ShortOpt(letter='b', argument='VALUE')]
"""
from dataclasses import dataclass
from enum import Enum, auto

from .faults import (
    UnknownOptionError,
    AmbiguousOptionError,
    MissingArgumentError,
    UnexpectedArgumentError,
)
from .tables import Arity, Ordering, ShortSpec


class ErrorKind(Enum):
    UNKNOWN_OPTION = auto()
    AMBIGUOUS_OPTION = auto()
    MISSING_ARGUMENT = auto()
    UNEXPECTED_ARGUMENT = auto()


class State(Enum):
    OPTIONS = auto()
    OPERANDS = auto()


@dataclass(frozen=True, slots=True)
class ShortOpt:
    letter: str
    argument: str | None = None


@dataclass(frozen=True, slots=True)
class LongOpt:
    index: int
    name: str
    argument: str | None = None


@dataclass(frozen=True, slots=True)
class Operand:
    text: str


@dataclass(frozen=True, slots=True)
class Terminator:
    pass


@dataclass(frozen=True, slots=True)
class Error:
    """
    An unclassifiable token.

    - option: what the diagnostic names: the letter for short options, the dashed
      name (the whole dashed token when it was not recognized) for long ones.
    - long: whether the offending option was spelled as a long option.
    - candidates: dashed names an ambiguous abbreviation could refer to.
    """
    kind: ErrorKind
    option: str
    long: bool = True
    candidates: tuple[str, ...] = ()

    def fault(self):
        """Build the OptionFault describing this error, worded like getopt(3)."""
        if self.kind is ErrorKind.AMBIGUOUS_OPTION:
            return AmbiguousOptionError.about(self.option, candidates=self.candidates)
        return _FAULTS[self.kind].about(self.option, long=self.long)


_FAULTS = {
    ErrorKind.UNKNOWN_OPTION: UnknownOptionError,
    ErrorKind.MISSING_ARGUMENT: MissingArgumentError,
    ErrorKind.UNEXPECTED_ARGUMENT: UnexpectedArgumentError,
}


class Scanner:
    """
    Single-pass, non-restartable classifier over an argv-like vector.

    Parameters
    - spec: ShortSpec | str
      the short options (a string is parsed with ShortSpec.parse).
    - table: OptionTable
      the long options; only read.
    - args: Sequence[str]
      args[0] is the program name and is never classified.
    - alternative: bool
      accept long options introduced by a single dash.

    Iterating the scanner yields elements until the vector is exhausted; a second
    iteration yields nothing.
    """

    def __init__(self, spec, table, args, /, alternative=False):
        self._spec = spec if isinstance(spec, ShortSpec) else ShortSpec.parse(spec)
        self._table = table
        self._args = list(args)
        self._alternative = bool(alternative)
        self._index = 1
        self._state = State.OPTIONS
        self._deferred = []
        self._elements = self._scan()

    @property
    def spec(self):
        return self._spec

    @property
    def state(self):
        return self._state

    def __iter__(self):
        return self

    def __next__(self):
        return next(self._elements)

    def _take(self):
        """Consume the next token as an option argument; None when exhausted."""
        if self._index >= len(self._args):
            return None
        token = self._args[self._index]
        self._index += 1
        return token

    def _scan(self):
        while self._index < len(self._args):
            token = self._args[self._index]
            self._index += 1

            if self._state is State.OPERANDS:
                yield Operand(token)
            elif token == "--":
                self._state = State.OPERANDS
                yield Terminator()
                # permuted operands go right behind the marker, before what follows it
                yield from map(Operand, self._deferred)
                self._deferred.clear()
            elif token.startswith("--"):
                yield from self._long(token[2:], "--")
            elif token.startswith("-") and token != "-":
                body = token[1:]
                if self._alternative and (len(body) > 1 or body not in self._spec):
                    yield from self._long(body, "-", fallback=True)
                else:
                    yield from self._short(body)
            elif self._spec.ordering is Ordering.REQUIRE_ORDER:
                self._state = State.OPERANDS
                yield Operand(token)
            elif self._spec.ordering is Ordering.RETURN_IN_ORDER:
                yield Operand(token)
            else:
                self._deferred.append(token)

        yield from map(Operand, self._deferred)
        self._deferred.clear()

    def _long(self, body, dash, *, fallback=False):
        name, separator, value = body.partition("=")
        try:
            index, option = self._table.match(name, dash)
        except UnknownOptionError:
            if fallback and body[:1] in self._spec:
                yield from self._short(body)
            else:
                yield Error(ErrorKind.UNKNOWN_OPTION, dash + body)
            return
        except AmbiguousOptionError as fault:
            yield Error(ErrorKind.AMBIGUOUS_OPTION, dash + name, candidates=fault.options["candidates"])
            return

        if separator:
            if option.arity is Arity.NONE:
                yield Error(ErrorKind.UNEXPECTED_ARGUMENT, dash + option.name)
            else:
                yield LongOpt(index, option.name, value)
        elif option.arity is Arity.REQUIRED:
            if (argument := self._take()) is None:
                yield Error(ErrorKind.MISSING_ARGUMENT, dash + option.name)
            else:
                yield LongOpt(index, option.name, argument)
        else:
            yield LongOpt(index, option.name)

    def _short(self, letters):
        for position, letter in enumerate(letters):
            arity = self._spec.arity(letter)
            if arity is None:
                yield Error(ErrorKind.UNKNOWN_OPTION, letter, long=False)
                continue
            if arity is Arity.NONE:
                yield ShortOpt(letter)
                continue

            # the letter takes an argument: it ends the bundle either way
            if rest := letters[position + 1:]:
                yield ShortOpt(letter, rest)
            elif arity is Arity.OPTIONAL:
                yield ShortOpt(letter)
            elif (argument := self._take()) is None:
                yield Error(ErrorKind.MISSING_ARGUMENT, letter, long=False)
            else:
                yield ShortOpt(letter, argument)
            return


def scan(spec, table, args, /, alternative=False):
    """Classify args (args[0] being the program name); see Scanner."""
    return Scanner(spec, table, args, alternative=alternative)


__all__ = (
    "ErrorKind",
    "State",
    "ShortOpt",
    "LongOpt",
    "Operand",
    "Terminator",
    "Error",
    "Scanner",
    "scan",
)

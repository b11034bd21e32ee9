r"""
egetopt option tables.

Overview
- Arity: whether an option takes no argument, a required one, or an optional one.
- LongOption: one long option descriptor (name, arity).
- OptionTable: ordered, append-only sequence of LongOption built from one or more
  comma/whitespace separated specification strings ("foo,bar:,baz::").
- ShortSpec: the parsed form of a short-option string ("+ab:c::").

Arity suffixes
- no suffix → Arity.NONE
- ":"       → Arity.REQUIRED
- "::"      → Arity.OPTIONAL

Short-option strings
- a leading "+" requests require-order scanning (stop at the first operand),
  a leading "-" return-in-order scanning (operands are reported in place),
  no prefix permutes (operands are moved behind the options).
- a ":" right after the prefix silences diagnostics for that spec.

Long-option matching
- an exact name wins (first one in table order);
- otherwise the name may be abbreviated as long as the abbreviation selects one
  distinct name; entries repeating the same name count as a single candidate.

Quick example:
    >>> table = OptionTable("foo,bar:")
    >>> table.parse("baz::")
    (2,)
    >>> [option.arity for option in table]
    [<Arity.NONE: 0>, <Arity.REQUIRED: 1>, <Arity.OPTIONAL: 2>]
    >>> table.candidates("ba")
    [1, 2]
"""
import re
from enum import Enum, IntEnum
from typing import NamedTuple

from .faults import FaultCode, InvalidSpecError, UnknownOptionError, AmbiguousOptionError
from .utils import view

_SEPARATORS = re.compile(r"[, \t\n]+")


class Arity(IntEnum):
    """Argument arity, numbered like getopt's has_arg."""
    NONE = 0
    REQUIRED = 1
    OPTIONAL = 2


class Ordering(Enum):
    """How operands interleave with options while scanning."""
    REQUIRE_ORDER = "+"
    RETURN_IN_ORDER = "-"
    PERMUTE = ""


class LongOption(NamedTuple):
    name: str
    arity: Arity = Arity.NONE


def split_arity(token, /):
    """
    Split an arity suffix off a specification token.

    Returns (name, arity); the name may come back empty ("::" alone), callers decide
    whether that is an error.
    """
    if token.endswith("::"):
        return token[:-2], Arity.OPTIONAL
    if token.endswith(":"):
        return token[:-1], Arity.REQUIRED
    return token, Arity.NONE


class OptionTable:
    """
    Ordered, growable table of long options.

    Lifecycle
    - created empty (or from initial spec strings) at the start of a session;
    - grown with add()/parse() while the session is configured;
    - read by the scanner; indices returned by add()/parse() never move.
    """

    options = view("options")

    def __init__(self, *specs):
        self._options = []
        for spec in specs:
            self.parse(spec)

    def reset(self):
        """Drop every registered option."""
        self._options.clear()

    def add(self, name, arity=Arity.NONE, /):
        """Append one long option and return its index."""
        if not isinstance(name, str):
            raise TypeError("add() name must be a string")
        if not name:
            raise ValueError("add() name must be a non-empty string")
        self._options.append(LongOption(name, Arity(arity)))
        return len(self._options) - 1

    def parse(self, spec, /):
        """
        Register every long option of a specification string.

        Tokens are separated by commas, spaces, tabs or newlines; empty tokens are
        skipped. A token that is only an arity suffix raises InvalidSpecError and
        leaves the table untouched.

        Returns the indices of the appended options, in order.
        """
        if not isinstance(spec, str):
            raise TypeError("parse() argument must be a string")

        pending = []
        for token in _SEPARATORS.split(spec):
            if not token:
                continue
            name, arity = split_arity(token)
            if not name:
                raise InvalidSpecError(
                    "empty long option after -l or --long argument",
                    code=FaultCode.INVALID_SPEC,
                    input=spec,
                )
            pending.append((name, arity))
        return tuple(self.add(name, arity) for name, arity in pending)

    def candidates(self, name, /):
        """
        Indices of the options a (possibly abbreviated) name can refer to.

        - [index] of the first exact match when there is one;
        - otherwise the first index of every distinct name starting with `name`.
        An empty name matches nothing.
        """
        if not name:
            return []
        seen = {}
        for index, option in enumerate(self._options):
            if option.name == name:
                return [index]
            if option.name.startswith(name):
                seen.setdefault(option.name, index)
        return list(seen.values())

    def match(self, name, dash="--", /):
        """
        Resolve a (possibly abbreviated) name to (index, LongOption).

        Raises UnknownOptionError when nothing matches and AmbiguousOptionError when
        the abbreviation selects several distinct names; both spell the option with
        `dash` ("-" for single-dash long options).
        """
        match self.candidates(name):
            case [index]:
                return index, self._options[index]
            case []:
                raise UnknownOptionError.about(dash + name)
            case indices:
                raise AmbiguousOptionError.about(
                    dash + name,
                    candidates=(dash + self._options[index].name for index in indices),
                )

    def __getitem__(self, index):
        return self._options[index]

    def __iter__(self):
        return iter(tuple(self._options))

    def __len__(self):
        return len(self._options)

    def __repr__(self):
        return "%s(%s)" % (type(self).__name__, ", ".join(
            option.name + ":" * option.arity for option in self._options
        ))


class ShortSpec:
    """
    Parsed short-option string.

    Attributes
    - ordering: Ordering selected by the leading "+"/"-" (PERMUTE when absent).
    - silent: True when a ":" follows the prefix (no diagnostics for this spec).
    - letters: read-only mapping letter → Arity; the first occurrence of a letter wins.
    """

    ordering = view("ordering")
    silent = view("silent")
    letters = view("letters")

    def __init__(self, ordering, letters, /, silent=False):
        self._ordering = Ordering(ordering)
        self._letters = dict(letters)
        self._silent = bool(silent)

    @classmethod
    def parse(cls, spec, /):
        if not isinstance(spec, str):
            raise TypeError("parse() argument must be a string")

        ordering = Ordering(spec[:1]) if spec[:1] in ("+", "-") else Ordering.PERMUTE
        body = spec[len(ordering.value):]
        silent = body.startswith(":")

        letters = {}
        index = 0
        while index < len(body):
            letter = body[index]
            index += 1
            if letter == ":":
                continue
            arity = Arity.NONE
            if body[index:index + 2] == "::":
                arity, index = Arity.OPTIONAL, index + 2
            elif body[index:index + 1] == ":":
                arity, index = Arity.REQUIRED, index + 1
            letters.setdefault(letter, arity)
        return cls(ordering, letters, silent=silent)

    def arity(self, letter, /):
        """Arity of a short option letter, None when the letter is not an option."""
        return self._letters.get(letter)

    def __contains__(self, letter):
        return letter in self._letters

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self.ordering.value + ":" * self.silent + "".join(
            letter + ":" * arity for letter, arity in self._letters.items()
        ))


__all__ = (
    "Arity",
    "Ordering",
    "LongOption",
    "OptionTable",
    "ShortSpec",
    "split_arity",
)

"""
Shell quoting for emitted tokens.

normalize() puts single quotes around a token and escapes whatever the target
shell would still interpret inside them:

- bash family (bash, sh): only the single quote needs care; it becomes '\\''
  (close the quoted span, an escaped quote, reopen the span).
- C-shell family (tcsh, csh): additionally '!' (history expansion) becomes '\\!',
  a newline becomes the two characters \\n, and any other whitespace character
  is escaped outside the quoted span.

Each input character takes at most four output characters, plus the two outer
quotes.
"""
from enum import Enum

from .faults import FaultCode, UnknownShellError

# C isspace() in the "C" locale, newline handled separately
_WHITESPACE = frozenset(" \t\v\f\r")


class Shell(Enum):
    """Quoting rule set of the shell that will re-read the output."""
    BASH = "bash"
    TCSH = "tcsh"

    @classmethod
    def from_name(cls, name, /):
        """
        resolve a shell name given on the command line.

        "bash" and "sh" select the bash family, "tcsh" and "csh" the C-shell family.
        Anything else raises UnknownShellError.
        """
        try:
            return _ALIASES[name]
        except (KeyError, TypeError):
            raise UnknownShellError(
                "unknown shell after -s or --shell argument",
                code=FaultCode.UNKNOWN_SHELL,
                input=name,
            ) from None


_ALIASES = {
    "bash": Shell.BASH,
    "sh": Shell.BASH,
    "tcsh": Shell.TCSH,
    "csh": Shell.TCSH,
}


def normalize(text, /, quote=True, shell=Shell.BASH):
    """
    Quote one token so the target shell reads it back as exactly `text`.

    Parameters
    - text: str
      the token to quote; never modified.
    - quote: bool
      when False, `text` is returned unchanged.
    - shell: Shell
      the dialect whose quoting rules apply.

    Examples
    - normalize("it's")            -> "'it'\\''s'"
    - normalize("a b", shell=TCSH) -> "'a'\\ 'b'"
    - normalize("x", quote=False)  -> "x"
    """
    if not quote:
        return text

    csh = shell is Shell.TCSH
    parts = ["'"]
    for char in text:
        if char == "'":
            parts.append("'\\''")
        elif csh and char == "!":
            parts.append("'\\!'")
        elif csh and char == "\n":
            parts.append("\\n")
        elif csh and char in _WHITESPACE:
            parts.append("'\\" + char + "'")
        else:
            parts.append(char)
    parts.append("'")
    return "".join(parts)


__all__ = (
    "Shell",
    "normalize",
)

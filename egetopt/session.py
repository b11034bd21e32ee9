"""
egetopt sessions: one parsing run's configuration and option table.

A Session replaces process-wide parsing state. It holds:
- quote: quote emitted tokens (default True).
- shell: Shell dialect used for quoting (default Shell.BASH; names are accepted).
- alternative: accept long options introduced by a single dash (default False).
- quiet_errors: do not render diagnostics for unclassifiable tokens (default False).
- quiet_output: produce no output line, only a status (default False).
- name: program name shown in diagnostics (default: args[0] of the scanned vector).
- colorful: style diagnostics with the fault palette (default False).
- table: the OptionTable of long options, owned by this session.

Configuration is read-only once the session exists; only the table grows, through
longoptions(), before run() is called.
"""
from .output import generate_output
from .quoting import Shell, normalize
from .scanner import Scanner
from .tables import OptionTable
from .utils import Unset, coalesce, view


class Session:
    quote = view("quote")
    shell = view("shell")
    alternative = view("alternative")
    quiet_errors = view("quiet_errors")
    quiet_output = view("quiet_output")
    name = view("name")
    colorful = view("colorful")
    table = view("table")

    def __init__(
            self,
            *,
            quote=Unset,
            shell=Unset,
            alternative=Unset,
            quiet_errors=Unset,
            quiet_output=Unset,
            name=Unset,
            colorful=Unset,
            table=Unset,
    ):
        shell = coalesce(shell, Shell.BASH)
        if not isinstance(table, OptionTable | Unset):
            raise TypeError("Session 'table' must be an option table")
        if name is not Unset and not isinstance(name, str):
            raise TypeError("Session 'name' must be a string")

        self._quote = bool(coalesce(quote, True))
        self._shell = shell if isinstance(shell, Shell) else Shell.from_name(shell)
        self._alternative = bool(coalesce(alternative, False))
        self._quiet_errors = bool(coalesce(quiet_errors, False))
        self._quiet_output = bool(coalesce(quiet_output, False))
        self._name = name
        self._colorful = bool(coalesce(colorful, False))
        self._table = coalesce(table, OptionTable())

    def longoptions(self, spec, /):
        """Register the long options of a specification string (see OptionTable.parse)."""
        return self._table.parse(spec)

    def normalize(self, text, /):
        """Quote one token with this session's quoting settings."""
        return normalize(text, self._quote, self._shell)

    def scan(self, spec, args, /):
        """Return a fresh Scanner over args using this session's table and mode."""
        return Scanner(spec, self._table, args, alternative=self._alternative)

    def run(self, spec, args, /):
        """Scan args and format the result; returns an Output (line, status, faults)."""
        return generate_output(self, spec, args)

    def __repr__(self):
        return "%s(quote=%r, shell=%s, alternative=%r, quiet_errors=%r, quiet_output=%r, table=%r)" % (
            type(self).__name__,
            self._quote,
            self._shell.value,
            self._alternative,
            self._quiet_errors,
            self._quiet_output,
            self._table,
        )


__all__ = (
    "Session",
)

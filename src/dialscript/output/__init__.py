"""Terminal rendering of diagnostics and fix reports."""

from dialscript.output.console import ConsoleReporter

__all__ = ["ConsoleReporter"]

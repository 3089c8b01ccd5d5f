"""DialScript checker: validation and auto-correction of DialScript screenplays."""

__version__ = "1.0.0"

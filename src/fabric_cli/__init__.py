"""Command-line administration for permissioned ledger networks."""

__version__ = "0.1.0"

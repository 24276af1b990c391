"""Mini README: Core package initializer for Budget Buddy.

Budget Buddy is a personal expense tracker. The ``ledger`` subpackage holds
the in-memory budget model (categories, transactions, aggregates) and the
``interface`` subpackage exposes it over HTTP. Only the logging helper is
re-exported here so importing the package stays cheap.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]

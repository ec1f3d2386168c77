"""Personal finance ledger: balances, budgets, goals and reports."""

__version__ = "0.1.0"

"""Domain layer for daybook application."""

# Services are imported lazily so that storage modules can import
# daybook.domain.entities without pulling the services in first.
_EXPORTS = {
    "LedgerService": "daybook.domain.ledger",
    "UndoManager": "daybook.domain.undo",
    "CurrencyConverter": "daybook.domain.currency",
}

__all__ = list(_EXPORTS)


def __getattr__(name):
    if name in _EXPORTS:
        import importlib

        return getattr(importlib.import_module(_EXPORTS[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")

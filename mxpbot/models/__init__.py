from mxpbot.models.ledger_record import LedgerRecord

__all__ = [
    "LedgerRecord",
]

"""
Services package

Business logic for the ledger: chart lookups, validation, credentials and
the transaction lifecycle.
"""

from .chart_registry import ChartRegistry
from .credential_service import CredentialManager
from .ledger_validator import LedgerValidator
from .transaction_service import TransactionService
from .user_service import UserService

__all__ = [
    "ChartRegistry",
    "CredentialManager",
    "LedgerValidator",
    "TransactionService",
    "UserService",
]

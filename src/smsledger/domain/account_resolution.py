"""Account resolution for extracted transactions."""

import logging
from typing import Optional

from smsledger.database.base import Database
from smsledger.domain.entities import Account, ExtractionResult
from smsledger.domain.errors import PersistenceError, ValidationError

logger = logging.getLogger(__name__)


class AccountResolver:
    """Picks the account an extracted transaction belongs to.

    Resolution order:
    1. account_id declared by the matched custom rule
    2. account remembered for the identified bank
    3. account whose number ends with (or whose name contains) the extracted suffix
    4. account whose name contains the identified bank name
    5. the first candidate account
    The name based steps are weak signals and can false-positive.
    """

    def __init__(self, db: Database):
        """Initialize account resolver.

        Args:
            db: Database instance holding bank to account mappings
        """
        self.db = db

    def list_bank_mappings(self) -> dict[str, str]:
        """Get remembered bank to account mappings.

        Returns:
            Dict of lowercased bank name to account ID (empty if unreadable)
        """
        try:
            return self.db.get_bank_account_mappings()
        except PersistenceError as e:
            logger.warning("Bank account mappings unavailable: %s", e)
            return {}

    def remember_bank(self, bank_name: str, account_id: str) -> None:
        """Remember which account a bank's messages belong to.

        Args:
            bank_name: Bank name as returned by the bank identifier
            account_id: Account ID to use for that bank

        Raises:
            ValidationError: If bank name or account ID is empty
            PersistenceError: If the mapping could not be saved
        """
        if not bank_name or not bank_name.strip():
            raise ValidationError("Bank name cannot be empty")
        if not account_id:
            raise ValidationError("Account ID cannot be empty")
        self.db.set_bank_account_mapping(bank_name.strip().lower(), account_id)

    def suggest_account(self, bank_name: Optional[str], accounts: list[Account]) -> Optional[Account]:
        """Suggest an account for a bank.

        Args:
            bank_name: Identified bank name
            accounts: Candidate accounts

        Returns:
            The remembered account, else the first account named after the bank, else None
        """
        if not bank_name:
            return None

        mapped_id = self.list_bank_mappings().get(bank_name.lower())
        if mapped_id:
            return _find_by_id(accounts, mapped_id)

        return _find_by_name(accounts, bank_name)

    def resolve(
        self,
        extraction: ExtractionResult,
        accounts: list[Account],
        default: Optional[str] = None,
    ) -> Optional[str]:
        """Resolve the account ID for an extraction.

        Args:
            extraction: Extraction result
            accounts: Candidate accounts
            default: Fallback account ID (default: first candidate account)

        Returns:
            Account ID, or None if there are no accounts and no default
        """
        if extraction.account_id:
            account = _find_by_id(accounts, extraction.account_id)
            if account is not None:
                return account.id
            logger.debug("Rule account %s is not among the candidates", extraction.account_id)

        if extraction.bank_name:
            mapped_id = self.list_bank_mappings().get(extraction.bank_name.lower())
            if mapped_id:
                account = _find_by_id(accounts, mapped_id)
                if account is not None:
                    return account.id

        if extraction.account_last4:
            suffix = extraction.account_last4
            for account in accounts:
                if account.account_number and account.account_number.endswith(suffix):
                    return account.id
            for account in accounts:
                if account.name and suffix in account.name:
                    return account.id

        if extraction.bank_name:
            account = _find_by_name(accounts, extraction.bank_name)
            if account is not None:
                return account.id

        if default is not None:
            return default
        return accounts[0].id if accounts else None


def _find_by_id(accounts: list[Account], account_id: str) -> Optional[Account]:
    for account in accounts:
        if str(account.id) == str(account_id):
            return account
    return None


def _find_by_name(accounts: list[Account], bank_name: str) -> Optional[Account]:
    needle = bank_name.lower()
    for account in accounts:
        if account.name and needle in account.name.lower():
            return account
    return None

"""
Journal Entry Generator
Synthesizes debit/credit postings for a lease contract

Legacy mode reproduces the original posting set:
  - ASC842: initial recognition + one blended payment posting a month later
  - IFRS16: initial recognition only
  - anything else: no postings
Per-period mode posts recognition plus an interest / principal pair for
every schedule period.
"""

import logging
from datetime import datetime
from typing import List, Dict, Optional, Sequence

from lease_compliance.lease_accounting.core.models import (
    ASC842,
    IFRS16,
    JournalPosting,
    LeaseContract,
    ScheduleEntry,
)
from lease_compliance.lease_accounting.utils.date_utils import add_months
from lease_compliance.lease_accounting.utils.finance import round_currency

logger = logging.getLogger(__name__)

ROU_ASSET = "Right-of-Use Asset"
LEASE_LIABILITY = "Lease Liability"
INTEREST_EXPENSE = "Interest Expense"
CASH = "Cash"


class JournalGenerator:
    """
    Generate journal postings for one contract under one standard
    """

    def __init__(self, schedule_type: str = ASC842):
        self.schedule_type = schedule_type  # "ASC842" or "IFRS16"
        self.journal_entries: List[JournalPosting] = []

    @property
    def is_supported(self) -> bool:
        return self.schedule_type in (ASC842, IFRS16)

    def generate_journals(
        self,
        contract: LeaseContract,
        schedule: Optional[Sequence[ScheduleEntry]] = None,
        per_period: bool = False,
        entry_date: Optional[datetime] = None
    ) -> List[JournalPosting]:
        """
        Generate postings for the contract

        Args:
            contract: Contract exposing id, name and amount
            schedule: Generated schedule (required for per_period)
            per_period: Post interest/principal pairs for every period
                        instead of the single blended payment posting
            entry_date: Recognition date; defaults to now
        Returns:
            Postings in date order; empty for an unrecognized standard
        """
        self.journal_entries = []

        if not self.is_supported:
            logger.warning(f"⚠️  No journal rules for schedule type {self.schedule_type!r}")
            return self.journal_entries

        base_date = entry_date or datetime.now()
        self._add_recognition(contract, base_date)

        if per_period:
            if not schedule:
                logger.warning(f"⚠️  Per-period journals requested for contract {contract.id} without a schedule")
            for entry in schedule or []:
                self._add_period_pair(contract, entry)
        elif self.schedule_type == ASC842:
            # Blended posting for the full contract amount, not principal only
            self._add_entry(
                entry_date=add_months(base_date, 1),
                description=f"Monthly lease payment - {contract.name}",
                debit_account=LEASE_LIABILITY,
                credit_account=CASH,
                amount=contract.amount,
                reference=f"ASC842-PMT-{contract.id}",
            )

        logger.debug(f"📝 {len(self.journal_entries)} {self.schedule_type} postings for contract {contract.id}")
        return self.journal_entries

    def _add_recognition(self, contract: LeaseContract, entry_date: datetime):
        """Dr ROU asset / Cr lease liability for the full contract amount"""
        if self.schedule_type == ASC842:
            description = f"Initial recognition of lease - {contract.name}"
        else:
            description = f"IFRS 16 lease recognition - {contract.name}"

        self._add_entry(
            entry_date=entry_date,
            description=description,
            debit_account=ROU_ASSET,
            credit_account=LEASE_LIABILITY,
            amount=contract.amount,
            reference=f"{self.schedule_type}-{contract.id}",
        )

    def _add_period_pair(self, contract: LeaseContract, entry: ScheduleEntry):
        """Interest and principal legs of one period's payment; zero legs are skipped"""
        posted_on = datetime.combine(entry.payment_date, datetime.min.time())

        if entry.interest_expense:
            self._add_entry(
                entry_date=posted_on,
                description=f"Lease interest, period {entry.period} - {contract.name}",
                debit_account=INTEREST_EXPENSE,
                credit_account=CASH,
                amount=entry.interest_expense,
                reference=f"{self.schedule_type}-INT-{contract.id}-{entry.period}",
            )
        if entry.principal_payment:
            self._add_entry(
                entry_date=posted_on,
                description=f"Lease principal repayment, period {entry.period} - {contract.name}",
                debit_account=LEASE_LIABILITY,
                credit_account=CASH,
                amount=entry.principal_payment,
                reference=f"{self.schedule_type}-PRN-{contract.id}-{entry.period}",
            )

    def _add_entry(self, entry_date: datetime, description: str, debit_account: str,
                   credit_account: str, amount: float, reference: str = ""):
        """Append a posting"""
        self.journal_entries.append(JournalPosting(
            entry_date=entry_date,
            description=description,
            debit_account=debit_account,
            credit_account=credit_account,
            amount=round_currency(amount),
            reference=reference,
        ))

    def get_account_totals(self) -> Dict[str, Dict[str, float]]:
        """Debit and credit totals per account"""
        totals: Dict[str, Dict[str, float]] = {}
        for posting in self.journal_entries:
            debit = totals.setdefault(posting.debit_account, {'debit': 0.0, 'credit': 0.0})
            debit['debit'] += posting.amount
            credit = totals.setdefault(posting.credit_account, {'debit': 0.0, 'credit': 0.0})
            credit['credit'] += posting.amount

        for account_totals in totals.values():
            account_totals['debit'] = round_currency(account_totals['debit'])
            account_totals['credit'] = round_currency(account_totals['credit'])
        return totals

    def verify_balance(self) -> bool:
        """
        Verify that debits equal credits across all accounts
        Each posting carries one debit and one credit leg of the same amount
        """
        totals = self.get_account_totals()
        total_debits = sum(t['debit'] for t in totals.values())
        total_credits = sum(t['credit'] for t in totals.values())
        return abs(total_debits - total_credits) < 0.01  # Allow for rounding


def generate_journal_entries(
    contract: LeaseContract,
    schedule_type: str,
    schedule: Optional[Sequence[ScheduleEntry]] = None,
    per_period: bool = False,
    entry_date: Optional[datetime] = None
) -> List[JournalPosting]:
    """
    Convenience function to generate journal postings
    """
    generator = JournalGenerator(schedule_type=schedule_type)
    return generator.generate_journals(contract, schedule, per_period=per_period, entry_date=entry_date)

"""
Database layer - contracts, compliance schedules, payments and journal postings
"""
import json
import sqlite3
from datetime import datetime
from typing import Dict, List, Optional
from contextlib import contextmanager
import logging

from lease_compliance.config import Config

logger = logging.getLogger(__name__)

DATABASE_PATH = str(Config.DATABASE_PATH)

PAYMENT_STATUSES = ('Scheduled', 'Due', 'Paid', 'Overdue')
PAYMENT_UPDATE_FIELDS = ('amount', 'due_date', 'status', 'paid_date')


@contextmanager
def get_db_connection():
    """Context manager for database connections"""
    conn = sqlite3.connect(DATABASE_PATH)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_database(db_path: Optional[str] = None):
    """Initialize database tables"""
    global DATABASE_PATH
    if db_path:
        DATABASE_PATH = str(db_path)

    with get_db_connection() as conn:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS contracts (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                vendor TEXT,
                type TEXT,
                payment_terms TEXT,
                amount REAL NOT NULL,
                status TEXT DEFAULT 'Active',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Schedule rows are stored as a JSON blob
        conn.execute("""
            CREATE TABLE IF NOT EXISTS compliance_schedules (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                contract_id INTEGER NOT NULL,
                type TEXT NOT NULL,
                schedule_data TEXT NOT NULL,
                present_value REAL,
                discount_rate REAL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (contract_id) REFERENCES contracts(id)
            )
        """)

        conn.execute("""
            CREATE TABLE IF NOT EXISTS payments (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                contract_id INTEGER NOT NULL,
                schedule_id INTEGER,
                amount REAL NOT NULL,
                due_date DATE NOT NULL,
                status TEXT NOT NULL DEFAULT 'Scheduled',
                paid_date TIMESTAMP,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (contract_id) REFERENCES contracts(id)
            )
        """)

        # Databases created before payment settlement
        try:
            conn.execute("ALTER TABLE payments ADD COLUMN paid_date TIMESTAMP")
            logger.info("✅ Added column: payments.paid_date")
        except sqlite3.OperationalError as e:
            if "duplicate column" not in str(e).lower():
                raise

        conn.execute("""
            CREATE TABLE IF NOT EXISTS journal_entries (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                contract_id INTEGER NOT NULL,
                entry_date TIMESTAMP NOT NULL,
                description TEXT NOT NULL,
                debit_account TEXT NOT NULL,
                credit_account TEXT NOT NULL,
                amount REAL NOT NULL,
                reference TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (contract_id) REFERENCES contracts(id)
            )
        """)

    logger.debug(f"Database ready at {DATABASE_PATH}")


def create_contract(name: str, amount: float, vendor: str = '', type: str = '',
                    payment_terms: str = '', status: str = 'Active') -> Dict:
    """Insert a contract and return it"""
    with get_db_connection() as conn:
        cursor = conn.execute(
            """INSERT INTO contracts (name, vendor, type, payment_terms, amount, status)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (name, vendor, type, payment_terms, amount, status)
        )
        contract_id = cursor.lastrowid
    return get_contract(contract_id)


def get_contract(contract_id: int) -> Optional[Dict]:
    """Get contract by ID"""
    with get_db_connection() as conn:
        row = conn.execute("SELECT * FROM contracts WHERE id = ?", (contract_id,)).fetchone()
        return dict(row) if row else None


def list_contracts() -> List[Dict]:
    """All contracts, newest first"""
    with get_db_connection() as conn:
        rows = conn.execute("SELECT * FROM contracts ORDER BY id DESC").fetchall()
        return [dict(row) for row in rows]


def _schedule_row_to_dict(row) -> Dict:
    schedule = dict(row)
    schedule['schedule_data'] = json.loads(schedule['schedule_data'])
    return schedule


def save_compliance_schedule(contract_id: int, schedule_type: str, schedule_data: List[Dict],
                             present_value: float, discount_rate: float,
                             payments: List[Dict]) -> Dict:
    """
    Persist a generated schedule and its payment records in one transaction
    Either everything is written or nothing is
    """
    with get_db_connection() as conn:
        cursor = conn.execute(
            """INSERT INTO compliance_schedules (contract_id, type, schedule_data, present_value, discount_rate)
               VALUES (?, ?, ?, ?, ?)""",
            (contract_id, schedule_type, json.dumps(schedule_data), present_value, discount_rate)
        )
        schedule_id = cursor.lastrowid

        for payment in payments:
            conn.execute(
                """INSERT INTO payments (contract_id, schedule_id, amount, due_date, status)
                   VALUES (?, ?, ?, ?, ?)""",
                (contract_id, schedule_id, payment['amount'], payment['due_date'], payment['status'])
            )

    logger.info(f"💾 Saved {schedule_type} schedule {schedule_id} with {len(payments)} payments for contract {contract_id}")
    return get_compliance_schedule(schedule_id)


def get_compliance_schedule(schedule_id: int) -> Optional[Dict]:
    """Get a single compliance schedule with decoded schedule data"""
    with get_db_connection() as conn:
        row = conn.execute("SELECT * FROM compliance_schedules WHERE id = ?", (schedule_id,)).fetchone()
        return _schedule_row_to_dict(row) if row else None


def get_compliance_schedules(contract_id: int) -> List[Dict]:
    """All schedules generated for a contract, oldest first"""
    with get_db_connection() as conn:
        rows = conn.execute(
            "SELECT * FROM compliance_schedules WHERE contract_id = ? ORDER BY id",
            (contract_id,)
        ).fetchall()
        return [_schedule_row_to_dict(row) for row in rows]


def list_compliance_schedules() -> List[Dict]:
    """Schedules across all contracts, newest first"""
    with get_db_connection() as conn:
        rows = conn.execute("SELECT * FROM compliance_schedules ORDER BY id DESC").fetchall()
        return [_schedule_row_to_dict(row) for row in rows]


def get_payments(contract_id: int) -> List[Dict]:
    """Payment records for a contract in due-date order"""
    with get_db_connection() as conn:
        rows = conn.execute(
            "SELECT * FROM payments WHERE contract_id = ? ORDER BY due_date, id",
            (contract_id,)
        ).fetchall()
        return [dict(row) for row in rows]


def list_payments() -> List[Dict]:
    """Payment records across all contracts in due-date order"""
    with get_db_connection() as conn:
        rows = conn.execute("SELECT * FROM payments ORDER BY due_date, id").fetchall()
        return [dict(row) for row in rows]


def get_payment(payment_id: int) -> Optional[Dict]:
    """Get payment record by ID"""
    with get_db_connection() as conn:
        row = conn.execute("SELECT * FROM payments WHERE id = ?", (payment_id,)).fetchone()
        return dict(row) if row else None


def update_payment(payment_id: int, updates: Dict) -> Optional[Dict]:
    """
    Update editable payment fields (amount, due_date, status, paid_date)
    Identity fields are never touched. Returns None for an unknown payment.
    """
    fields = [f for f in PAYMENT_UPDATE_FIELDS if f in updates]
    if not fields:
        return get_payment(payment_id)

    set_clause = ', '.join(f"{f} = ?" for f in fields)
    values = [updates[f] for f in fields] + [payment_id]
    with get_db_connection() as conn:
        cursor = conn.execute(f"UPDATE payments SET {set_clause} WHERE id = ?", values)
        if cursor.rowcount == 0:
            return None

    logger.info(f"💾 Updated payment {payment_id}: {', '.join(fields)}")
    return get_payment(payment_id)


def mark_payment_paid(payment_id: int, paid_on: Optional[datetime] = None) -> Optional[Dict]:
    """Settle a payment: status 'Paid' with the paid timestamp (defaults to now)"""
    paid_on = paid_on or datetime.now()
    return update_payment(payment_id, {
        'status': 'Paid',
        'paid_date': paid_on.isoformat(timespec='seconds'),
    })


def save_journal_entries(contract_id: int, postings: List[Dict]) -> List[Dict]:
    """Persist each posting as an individual ledger record"""
    with get_db_connection() as conn:
        ids = []
        for posting in postings:
            cursor = conn.execute(
                """INSERT INTO journal_entries
                   (contract_id, entry_date, description, debit_account, credit_account, amount, reference)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (contract_id, posting['entry_date'], posting['description'], posting['debit_account'],
                 posting['credit_account'], posting['amount'], posting['reference'])
            )
            ids.append(cursor.lastrowid)

        if not ids:
            return []
        placeholders = ','.join('?' * len(ids))
        rows = conn.execute(
            f"SELECT * FROM journal_entries WHERE id IN ({placeholders}) ORDER BY id", ids
        ).fetchall()
        return [dict(row) for row in rows]


def get_journal_entries(contract_id: int) -> List[Dict]:
    """Journal postings for a contract"""
    with get_db_connection() as conn:
        rows = conn.execute(
            "SELECT * FROM journal_entries WHERE contract_id = ? ORDER BY entry_date, id",
            (contract_id,)
        ).fetchall()
        return [dict(row) for row in rows]


def list_journal_entries() -> List[Dict]:
    """Journal postings across all contracts"""
    with get_db_connection() as conn:
        rows = conn.execute("SELECT * FROM journal_entries ORDER BY entry_date, id").fetchall()
        return [dict(row) for row in rows]

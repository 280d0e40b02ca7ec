"""
Lease Compliance Backend API
Generates compliance schedules and journal entries for stored contracts
"""

from flask import Blueprint, request, jsonify, send_file, current_app
from datetime import date, datetime
from typing import List, Optional
import logging

from lease_compliance import database
from lease_compliance.lease_accounting.core.exceptions import (
    InvalidLeaseParameters,
    UnsupportedStandard,
)
from lease_compliance.lease_accounting.core.models import (
    ASC842,
    SUPPORTED_STANDARDS,
    LeaseContract,
    LeaseEconomics,
    ScheduleEntry,
)
from lease_compliance.lease_accounting.schedule.generator import generate_schedule, schedule_present_value
from lease_compliance.lease_accounting.utils.date_utils import parse_date
from lease_compliance.lease_accounting.utils.journal_generator import JournalGenerator
from lease_compliance.lease_accounting.utils.schedule_export import export_schedule_workbook

# Create blueprint
compliance_bp = Blueprint('compliance', __name__, url_prefix='/api')

logger = logging.getLogger(__name__)


def _parse_number(value, field_name: str) -> Optional[float]:
    """Parse an optional numeric field from the request body"""
    if value is None or value == '':
        return None
    try:
        return float(value)
    except (ValueError, TypeError):
        raise InvalidLeaseParameters(f"{field_name} must be a number (got {value!r})")


def derive_payment_records(schedule: List[ScheduleEntry], today: Optional[date] = None) -> List[dict]:
    """
    One payment record per schedule period
    Status is 'Due' once the due date has been reached, otherwise 'Scheduled'
    """
    today = today or date.today()
    return [
        {
            'amount': entry.lease_payment,
            'due_date': entry.payment_date.isoformat(),
            'status': 'Due' if entry.payment_date <= today else 'Scheduled',
        }
        for entry in schedule
    ]


def _parse_flag(value, field_name: str) -> bool:
    """Parse an optional JSON boolean; 'true'/'false' strings are accepted"""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ('true', 'false'):
        return value.strip().lower() == 'true'
    raise InvalidLeaseParameters(f"{field_name} must be true or false (got {value!r})")


def _payment_updates(data: dict):
    """
    Validate a payment update body (amount, dueDate, status, paidDate)
    Returns (updates, errors) with updates keyed by column name
    """
    updates, errors = {}, []

    if 'amount' in data:
        try:
            if isinstance(data['amount'], bool):
                raise TypeError
            amount = float(data['amount'])
            if amount <= 0:
                raise ValueError
            updates['amount'] = amount
        except (ValueError, TypeError):
            errors.append(f"amount must be a positive number (got {data['amount']!r})")

    for key, column in (('dueDate', 'due_date'), ('paidDate', 'paid_date')):
        if key not in data and column not in data:
            continue
        raw = data.get(key, data.get(column))
        if raw is None and column == 'paid_date':
            updates[column] = None
            continue
        parsed = parse_date(raw)
        if parsed is None:
            errors.append(f"{key} must be a YYYY-MM-DD date (got {raw!r})")
        else:
            updates[column] = parsed.isoformat()

    if 'status' in data:
        if data['status'] in database.PAYMENT_STATUSES:
            updates['status'] = data['status']
        else:
            errors.append(f"status must be one of {', '.join(database.PAYMENT_STATUSES)} (got {data['status']!r})")

    if not updates and not errors:
        errors.append("no updatable fields given")
    return updates, errors


def _load_contract(contract_id: int):
    contract = database.get_contract(contract_id)
    if not contract:
        logger.warning(f"⚠️  Contract {contract_id} not found")
    return contract


@compliance_bp.errorhandler(InvalidLeaseParameters)
@compliance_bp.errorhandler(UnsupportedStandard)
def handle_client_error(e):
    logger.warning(f"⚠️  Rejected request: {e}")
    body = {'error': str(e)}
    if isinstance(e, InvalidLeaseParameters):
        body['details'] = e.errors
    return jsonify(body), 400


@compliance_bp.route('/contracts', methods=['POST'])
def create_contract():
    """Create a contract record"""
    data = request.get_json(silent=True) or {}

    name = data.get('name')
    name = name.strip() if isinstance(name, str) else ''
    amount = _parse_number(data.get('amount'), 'amount')
    if not name or amount is None:
        return jsonify({'error': 'name and amount are required'}), 400

    contract = database.create_contract(
        name=name,
        amount=amount,
        vendor=data.get('vendor', ''),
        type=data.get('type', ''),
        payment_terms=data.get('payment_terms') or data.get('paymentTerms', ''),
        status=data.get('status', 'Active'),
    )
    logger.info(f"✅ Created contract {contract['id']} ({name})")
    return jsonify(contract), 201


@compliance_bp.route('/contracts', methods=['GET'])
def list_all_contracts():
    return jsonify(database.list_contracts())


@compliance_bp.route('/contracts/<int:contract_id>', methods=['GET'])
def get_contract(contract_id):
    contract = _load_contract(contract_id)
    if not contract:
        return jsonify({'error': 'Contract not found'}), 404
    return jsonify(contract)


@compliance_bp.route('/contracts/<int:contract_id>/compliance/<standard>', methods=['POST'])
def generate_compliance_schedule(contract_id, standard):
    """
    Generate, price and persist a compliance schedule
    Body (all optional): discountRate, leaseTerm, annualPayment, startDate
    """
    try:
        if standard not in SUPPORTED_STANDARDS:
            raise UnsupportedStandard(standard)

        contract = _load_contract(contract_id)
        if not contract:
            return jsonify({'error': 'Contract not found'}), 404

        data = request.get_json(silent=True) or {}
        logger.info(f"📥 {standard} schedule request for contract {contract_id}: {data}")

        amount = float(contract['amount'])
        discount_rate = _parse_number(data.get('discountRate'), 'discountRate')
        if discount_rate is None:
            discount_rate = current_app.config['DEFAULT_DISCOUNT_RATE']
        lease_term = _parse_number(data.get('leaseTerm'), 'leaseTerm')
        if lease_term is None:
            lease_term = current_app.config['DEFAULT_LEASE_TERM_YEARS']
        annual_payment = _parse_number(data.get('annualPayment'), 'annualPayment')
        if annual_payment is None and lease_term > 0:
            annual_payment = amount / lease_term

        economics = LeaseEconomics(
            principal=amount,
            periodic_payment=annual_payment,
            term_periods=lease_term,
            discount_rate=discount_rate,
            start_date=parse_date(data.get('startDate')),
        )

        schedule = generate_schedule(standard, economics)
        # Annual payments discounted at the annual rate
        pv = schedule_present_value(schedule, discount_rate)
        payments = derive_payment_records(schedule)

        schedule_data = [entry.to_dict() for entry in schedule]
        saved = database.save_compliance_schedule(
            contract_id=contract_id,
            schedule_type=standard,
            schedule_data=schedule_data,
            present_value=round(pv, 2),
            discount_rate=discount_rate,
            payments=payments,
        )

        logger.info(f"✅ {standard} schedule for contract {contract_id}: {len(schedule)} periods, PV={pv:,.2f}")
        return jsonify({
            'schedule': saved,
            'data': schedule_data,
            'present_value': pv,
            'payments_created': len(payments),
        }), 201

    except (InvalidLeaseParameters, UnsupportedStandard):
        raise
    except Exception as e:
        logger.error(f"❌ Error in generate_compliance_schedule: {e}", exc_info=True)
        return jsonify({'error': str(e)}), 500


@compliance_bp.route('/compliance-schedules', methods=['GET'])
def list_all_compliance_schedules():
    return jsonify(database.list_compliance_schedules())


@compliance_bp.route('/contracts/<int:contract_id>/compliance', methods=['GET'])
def list_compliance_schedules(contract_id):
    return jsonify(database.get_compliance_schedules(contract_id))


@compliance_bp.route('/contracts/<int:contract_id>/payments', methods=['GET'])
def list_payments(contract_id):
    return jsonify(database.get_payments(contract_id))


@compliance_bp.route('/payments', methods=['GET'])
def list_all_payments():
    return jsonify(database.list_payments())


@compliance_bp.route('/payments/<int:payment_id>', methods=['PUT'])
def update_payment(payment_id):
    """Edit a payment record; body (any of): amount, dueDate, status, paidDate"""
    if not database.get_payment(payment_id):
        return jsonify({'error': 'Payment not found'}), 404

    updates, errors = _payment_updates(request.get_json(silent=True) or {})
    if errors:
        logger.warning(f"⚠️  Rejected update for payment {payment_id}: {errors}")
        return jsonify({'error': 'Invalid payment update', 'details': errors}), 400

    return jsonify(database.update_payment(payment_id, updates))


@compliance_bp.route('/payments/<int:payment_id>/mark-paid', methods=['POST'])
def mark_payment_paid(payment_id):
    payment = database.mark_payment_paid(payment_id)
    if not payment:
        return jsonify({'error': 'Payment not found'}), 404

    logger.info(f"✅ Payment {payment_id} marked paid")
    return jsonify(payment)


@compliance_bp.route('/contracts/<int:contract_id>/journal-entries', methods=['POST'])
def generate_contract_journal_entries(contract_id):
    """
    Generate and persist journal postings
    Body: scheduleType (ASC842 | IFRS16), perPeriod (optional, uses the latest schedule)
    """
    try:
        contract_record = _load_contract(contract_id)
        if not contract_record:
            return jsonify({'error': 'Contract not found'}), 404

        data = request.get_json(silent=True) or {}
        schedule_type = data.get('scheduleType')
        per_period = _parse_flag(data.get('perPeriod'), 'perPeriod')

        generator = JournalGenerator(schedule_type=schedule_type)
        # The generator degrades to no postings; the API rejects the selector instead
        if not generator.is_supported:
            raise UnsupportedStandard(schedule_type)

        schedule = None
        if per_period:
            stored = [s for s in database.get_compliance_schedules(contract_id) if s['type'] == schedule_type]
            if not stored:
                return jsonify({'error': f'No {schedule_type} schedule generated for this contract'}), 400
            schedule = [ScheduleEntry.from_dict(row) for row in stored[-1]['schedule_data']]

        contract = LeaseContract.from_record(contract_record)
        postings = generator.generate_journals(contract, schedule, per_period=per_period)
        saved = database.save_journal_entries(contract_id, [p.to_dict() for p in postings])

        logger.info(f"✅ {len(saved)} {schedule_type} journal entries saved for contract {contract_id}")
        return jsonify(saved), 201

    except (InvalidLeaseParameters, UnsupportedStandard):
        raise
    except Exception as e:
        logger.error(f"❌ Error in generate_contract_journal_entries: {e}", exc_info=True)
        return jsonify({'error': str(e)}), 500


@compliance_bp.route('/journal-entries', methods=['GET'])
def list_all_journal_entries():
    return jsonify(database.list_journal_entries())


@compliance_bp.route('/contracts/<int:contract_id>/journal-entries', methods=['GET'])
def list_journal_entries(contract_id):
    return jsonify(database.get_journal_entries(contract_id))


@compliance_bp.route('/compliance-schedules/<int:schedule_id>/export-excel', methods=['GET'])
def export_schedule_excel(schedule_id):
    """Download a persisted ASC 842 schedule as a 14-column workbook"""
    try:
        schedule = database.get_compliance_schedule(schedule_id)
        if not schedule:
            return jsonify({'error': 'Schedule not found'}), 404

        if schedule['type'] != ASC842:
            return jsonify({'error': 'Only ASC 842 schedules can be exported to Excel'}), 400

        output = export_schedule_workbook(schedule['schedule_data'])
        file_name = f"ASC842_Schedule_{schedule_id}_{datetime.now().strftime('%Y-%m-%d')}.xlsx"

        return send_file(
            output,
            mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
            as_attachment=True,
            download_name=file_name
        )

    except Exception as e:
        logger.error(f"❌ Excel export error: {e}", exc_info=True)
        return jsonify({'error': str(e)}), 500

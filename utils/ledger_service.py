from decimal import Decimal, InvalidOperation
from flask import current_app
from extensions import db
from models import BalanceTransaction
from models.account_models import to_number
from utils.account_service import get_account
from utils.errors import InsufficientBalance, ValidationError
from utils.reward_service import local_now

TRANSACTION_TYPES = ('credit', 'debit')


def parse_amount(amount):
    if isinstance(amount, bool):
        raise ValidationError('Invalid amount')
    try:
        value = Decimal(str(amount).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError('Invalid amount')
    if not value.is_finite() or value <= 0:
        raise ValidationError('Invalid amount')
    return value


def update_balance(wallet_address, amount, tx_type, description=None, now=None):
    """
    余额调整：账户余额和流水记录在同一事务中提交
    :return: 响应字典（含 transactionId）
    """
    if tx_type not in TRANSACTION_TYPES:
        raise ValidationError('Invalid transaction type')
    transaction_amount = parse_amount(amount)

    # --- 加锁查询账户 ---
    account = get_account(wallet_address, lock=True)
    current_balance = Decimal(account.enb_balance or 0)

    if tx_type == 'credit':
        new_balance = current_balance + transaction_amount
    else:
        if current_balance < transaction_amount:
            db.session.rollback()
            raise InsufficientBalance()
        new_balance = current_balance - transaction_amount

    record = BalanceTransaction(
        wallet_address=wallet_address,
        amount=transaction_amount,
        type=tx_type,
        description=description or '',
        balance_before=current_balance,
        balance_after=new_balance,
        timestamp=now or local_now()
    )

    account.enb_balance = new_balance
    db.session.add(record)
    db.session.commit()

    current_app.logger.info(
        f"Balance {tx_type} {wallet_address}: {current_balance} -> {new_balance} (tx #{record.id})"
    )

    return {
        'message': 'Balance updated successfully',
        'previousBalance': to_number(current_balance),
        'newBalance': to_number(new_balance),
        'transactionId': record.id,
    }


def get_transactions(wallet_address, limit=50):
    records = BalanceTransaction.query.filter_by(
        wallet_address=wallet_address
    ).order_by(
        BalanceTransaction.timestamp.desc(),
        BalanceTransaction.id.desc()
    ).limit(limit).all()
    return [r.to_dict() for r in records]

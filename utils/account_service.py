import secrets
from flask import current_app
from sqlalchemy.exc import IntegrityError
from extensions import db
from models import Account
from utils.errors import ApiError, DuplicateAccount, ConflictError, NotFound, ValidationError
from utils.reward_service import local_now

INVITATION_CODE_MAX_ATTEMPTS = 10
DEFAULT_USER_MAX_USES = 105


def generate_invitation_code():
    # 4 字节随机数 -> 8 位大写十六进制
    return secrets.token_hex(4).upper()


def is_invitation_code_unique(code):
    return Account.query.filter_by(invitation_code=code).first() is None


def generate_unique_invitation_code(max_attempts=INVITATION_CODE_MAX_ATTEMPTS):
    for _ in range(max_attempts):
        code = generate_invitation_code()
        if is_invitation_code_unique(code):
            return code
    raise ApiError(f'Failed to generate unique invitation code after {max_attempts} attempts')


def get_account(wallet_address, lock=False):
    query = Account.query.filter_by(wallet_address=wallet_address)
    if lock:
        query = query.with_for_update()
    account = query.first()
    if not account:
        raise NotFound('Account not found')
    return account


def find_by_invitation_code(invitation_code):
    return Account.query.filter_by(invitation_code=invitation_code).first()


def _ensure_new_wallet(wallet_address):
    if db.session.get(Account, wallet_address) is not None:
        raise DuplicateAccount()


def _commit_new_account(account):
    db.session.add(account)
    try:
        db.session.commit()
    except IntegrityError:
        # 并发创建同一钱包或邀请码冲突
        db.session.rollback()
        raise ConflictError('Account or invitation code already exists')
    return account


def create_account(wallet_address, transaction_hash, now=None):
    _ensure_new_wallet(wallet_address)

    invitation_code = generate_unique_invitation_code()
    current_app.logger.info(f"Generated invitation code {invitation_code} for {wallet_address}")

    account = Account(
        wallet_address=wallet_address,
        transaction_hash=transaction_hash,
        membership_level='Based',
        invitation_code=invitation_code,
        created_at=now or local_now(),
        last_daily_claim_time=None,
        consecutive_days=0,
        enb_balance=0,
        total_earned=0,
        is_activated=False,
    )
    return _commit_new_account(account)


def create_default_user(wallet_address, invitation_code, max_uses=None, now=None):
    """默认用户：自带激活状态和自定义邀请码，用来发放第一批邀请"""
    if max_uses is None:
        max_uses = DEFAULT_USER_MAX_USES
    if isinstance(max_uses, bool) or not isinstance(max_uses, int) or max_uses < 1:
        raise ValidationError('maxUses must be a positive integer')

    if not is_invitation_code_unique(invitation_code):
        raise ConflictError('Invitation code already exists')
    _ensure_new_wallet(wallet_address)

    now = now or local_now()
    account = Account(
        wallet_address=wallet_address,
        membership_level='Based',
        invitation_code=invitation_code,
        max_invitation_uses=max_uses,
        current_invitation_uses=0,
        created_at=now,
        last_daily_claim_time=None,
        consecutive_days=0,
        enb_balance=0,
        total_earned=0,
        is_activated=True,
        activated_at=now,
    )
    return _commit_new_account(account)


def list_users(limit=100, offset=0, membership_level=None, is_activated=None):
    query = Account.query
    if membership_level:
        query = query.filter(Account.membership_level == membership_level)
    if is_activated is not None:
        query = query.filter(Account.is_activated == is_activated)

    total = query.count()
    users = query.order_by(Account.created_at.desc()).offset(offset).limit(limit).all()

    return {
        'users': [u.to_dict() for u in users],
        'pagination': {
            'total': total,
            'limit': limit,
            'offset': offset,
            'hasMore': len(users) == limit,
        },
    }

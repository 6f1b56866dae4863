from flask import current_app
from sqlalchemy.exc import IntegrityError
from extensions import db
from models import Account, InvitationUsage
from utils.account_service import get_account, find_by_invitation_code
from utils.errors import (
    AlreadyActivated,
    ConflictError,
    InvitationAlreadyUsed,
    InvitationLimitExceeded,
    NotFound,
)
from utils.reward_service import local_now


def activate_account(wallet_address, invitation_code, now=None):
    """
    用邀请码激活账户。
    账户更新、邀请人计数 +1、使用记录，三者在同一个事务里提交。
    """
    account = get_account(wallet_address)

    if account.is_activated:
        raise AlreadyActivated()

    inviter = find_by_invitation_code(invitation_code)
    if not inviter:
        raise ConflictError('Invalid invitation code')

    if not inviter.is_activated:
        raise ConflictError('Invitation code is from an inactive account')

    max_uses = inviter.max_invitation_uses
    current_uses = inviter.current_invitation_uses or 0
    if current_uses >= max_uses:
        raise InvitationLimitExceeded()

    existing_usage = InvitationUsage.query.filter_by(
        invitation_code=invitation_code,
        used_by=wallet_address
    ).first()
    if existing_usage:
        raise InvitationAlreadyUsed()

    now = now or local_now()
    inviter_wallet = inviter.wallet_address

    try:
        # 激活只能发生一次：按未激活状态做条件更新
        activated = Account.query.filter(
            Account.wallet_address == wallet_address,
            Account.is_activated.is_(False)
        ).update({
            Account.is_activated: True,
            Account.activated_at: now,
            Account.activated_by: invitation_code,
            Account.inviter_wallet: inviter_wallet,
        }, synchronize_session=False)
        if activated != 1:
            db.session.rollback()
            raise AlreadyActivated()

        # 条件更新：并发时不会超过上限
        updated = Account.query.filter(
            Account.wallet_address == inviter_wallet,
            Account.current_invitation_uses < Account.max_invitation_uses
        ).update(
            {Account.current_invitation_uses: Account.current_invitation_uses + 1},
            synchronize_session=False
        )
        if updated != 1:
            db.session.rollback()
            raise InvitationLimitExceeded()

        db.session.add(InvitationUsage(
            invitation_code=invitation_code,
            used_by=wallet_address,
            used_at=now,
            inviter_wallet=inviter_wallet
        ))
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise InvitationAlreadyUsed()

    current_app.logger.info(f"Account {wallet_address} activated with code {invitation_code} from {inviter_wallet}")

    return {
        'message': 'Account activated successfully',
        'membershipLevel': account.membership_level or 'Based',
        'inviterWallet': inviter_wallet,
        'remainingUses': max_uses - (current_uses + 1),
    }


def get_invitation_usage(invitation_code):
    inviter = find_by_invitation_code(invitation_code)
    if not inviter:
        raise NotFound('Invitation code not found')

    usage_history = InvitationUsage.query.filter_by(
        invitation_code=invitation_code
    ).order_by(
        InvitationUsage.used_at.desc(),
        InvitationUsage.id.desc()
    ).all()

    return {
        'invitationCode': invitation_code,
        'totalUses': inviter.current_invitation_uses,
        'maxUses': inviter.max_invitation_uses,
        'remainingUses': inviter.remaining_invitation_uses,
        'usageHistory': [u.to_dict() for u in usage_history],
        'inviterWallet': inviter.wallet_address,
        'isInviterActivated': bool(inviter.is_activated),
    }

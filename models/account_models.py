from datetime import datetime
from decimal import Decimal
from sqlalchemy import Numeric
from extensions import db

MEMBERSHIP_LEVELS = ('Based', 'Super Based', 'Legendary')
DEFAULT_MAX_INVITATION_USES = 5


def to_iso(value):
    return value.isoformat() if value else None


def to_number(value):
    """Decimal -> int/float for JSON output."""
    if value is None:
        return 0
    value = Decimal(value)
    if value == value.to_integral_value():
        return int(value)
    return float(value)


class Account(db.Model):
    # 一个钱包地址一条记录
    __tablename__ = 'accounts'

    wallet_address = db.Column(db.String(66), primary_key=True)
    transaction_hash = db.Column(db.String(100), nullable=True)  # 创建账户的交易哈希
    membership_level = db.Column(db.String(20), nullable=False, default='Based')

    invitation_code = db.Column(db.String(32), unique=True, nullable=False, index=True)
    max_invitation_uses = db.Column(db.Integer, nullable=False, default=DEFAULT_MAX_INVITATION_USES)
    current_invitation_uses = db.Column(db.Integer, nullable=False, default=0)

    enb_balance = db.Column(Numeric(36, 18), nullable=False, default=0)
    total_earned = db.Column(Numeric(36, 18), nullable=False, default=0)
    consecutive_days = db.Column(db.Integer, nullable=False, default=0)
    last_daily_claim_time = db.Column(db.DateTime, nullable=True)
    last_transaction_hash = db.Column(db.String(100), nullable=True)

    is_activated = db.Column(db.Boolean, nullable=False, default=False, index=True)
    activated_at = db.Column(db.DateTime, nullable=True)
    activated_by = db.Column(db.String(32), nullable=True)  # 激活时使用的邀请码
    inviter_wallet = db.Column(db.String(66), nullable=True)

    last_upgrade_at = db.Column(db.DateTime, nullable=True)
    upgrade_transaction_hash = db.Column(db.String(100), nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.now)

    def __repr__(self):
        return f"<Account {self.wallet_address} {self.membership_level}>"

    @property
    def remaining_invitation_uses(self):
        return self.max_invitation_uses - self.current_invitation_uses

    def invitation_usage(self):
        if not self.invitation_code:
            return None
        return {
            'totalUses': self.current_invitation_uses,
            'maxUses': self.max_invitation_uses,
            'remainingUses': self.remaining_invitation_uses,
        }

    def to_profile(self):
        return {
            'walletAddress': self.wallet_address,
            'membershipLevel': self.membership_level or 'Based',
            'invitationCode': self.invitation_code,
            'invitationUsage': self.invitation_usage(),
            'enbBalance': to_number(self.enb_balance),
            'lastDailyClaimTime': to_iso(self.last_daily_claim_time),
            'consecutiveDays': self.consecutive_days or 0,
            'totalEarned': to_number(self.total_earned),
            'isActivated': bool(self.is_activated),
            'activatedAt': to_iso(self.activated_at),
            'joinDate': to_iso(self.created_at),
        }

    def to_dict(self):
        return {
            'id': self.wallet_address,
            'walletAddress': self.wallet_address,
            'membershipLevel': self.membership_level or 'Based',
            'invitationCode': self.invitation_code,
            'maxInvitationUses': self.max_invitation_uses,
            'currentInvitationUses': self.current_invitation_uses,
            'enbBalance': to_number(self.enb_balance),
            'totalEarned': to_number(self.total_earned),
            'consecutiveDays': self.consecutive_days or 0,
            'isActivated': bool(self.is_activated),
            'createdAt': to_iso(self.created_at),
            'activatedAt': to_iso(self.activated_at),
            'lastDailyClaimTime': to_iso(self.last_daily_claim_time),
        }

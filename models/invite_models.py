from datetime import datetime
from sqlalchemy import UniqueConstraint
from extensions import db


class InvitationUsage(db.Model):
    """邀请码使用记录，只追加不修改"""
    __tablename__ = 'invitation_usage'

    id = db.Column(db.Integer, primary_key=True)
    invitation_code = db.Column(db.String(32), nullable=False, index=True)
    used_by = db.Column(db.String(66), nullable=False, index=True)  # 被邀请的钱包地址
    used_at = db.Column(db.DateTime, nullable=False, default=datetime.now)
    inviter_wallet = db.Column(db.String(66), nullable=False)  # 发起邀请的钱包地址

    __table_args__ = (
        UniqueConstraint('invitation_code', 'used_by', name='uix_invitation_code_used_by'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'usedBy': self.used_by,
            'usedAt': self.used_at.isoformat() if self.used_at else None,
            'inviterWallet': self.inviter_wallet,
        }

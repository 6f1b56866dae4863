from datetime import datetime
from sqlalchemy import Numeric
from extensions import db
from .account_models import to_number


class BalanceTransaction(db.Model):
    __tablename__ = 'transactions'

    id = db.Column(db.Integer, primary_key=True)
    wallet_address = db.Column(db.String(66), nullable=False, index=True)
    amount = db.Column(Numeric(36, 18), nullable=False)
    type = db.Column(db.String(10), nullable=False)  # credit / debit
    description = db.Column(db.String(255), nullable=False, default='')
    balance_before = db.Column(Numeric(36, 18), nullable=False)
    balance_after = db.Column(Numeric(36, 18), nullable=False)
    timestamp = db.Column(db.DateTime, nullable=False, default=datetime.now, index=True)

    def to_dict(self):
        return {
            'id': self.id,
            'walletAddress': self.wallet_address,
            'amount': to_number(self.amount),
            'type': self.type,
            'description': self.description or '',
            'balanceBefore': to_number(self.balance_before),
            'balanceAfter': to_number(self.balance_after),
            'timestamp': self.timestamp.isoformat() if self.timestamp else None,
        }


class ClaimHistory(db.Model):
    __tablename__ = 'claims'

    id = db.Column(db.Integer, primary_key=True)
    wallet_address = db.Column(db.String(66), nullable=False, index=True)
    claimed_at = db.Column(db.DateTime, nullable=False, default=datetime.now)
    reward = db.Column(db.Integer, nullable=False, default=0)
    consecutive_days = db.Column(db.Integer, nullable=True)  # relay 路由不计算连续天数
    tx_hash = db.Column(db.String(100), nullable=True)


class MembershipUpgrade(db.Model):
    __tablename__ = 'upgrades'

    id = db.Column(db.Integer, primary_key=True)
    wallet_address = db.Column(db.String(66), nullable=False, index=True)
    level = db.Column(db.Integer, nullable=False)  # 0=Based 1=Super Based 2=Legendary
    tx_hash = db.Column(db.String(100), nullable=True)
    upgraded_at = db.Column(db.DateTime, nullable=False, default=datetime.now)

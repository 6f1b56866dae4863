from flask import Blueprint, request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from extensions import db
from blueprints.claim import is_wallet_address
from utils.claim_service import relay_daily_claim
from utils.membership_service import relay_membership_upgrade
from utils.relayer import current_relayer

relay_bp = Blueprint('relay', __name__, url_prefix='/relay')


# 只走链上，不改账户余额
@relay_bp.route('/daily-claim', methods=['POST'])
def relay_daily_claim_route():
    data = request.get_json(silent=True) or {}
    user = data.get('user')

    if not user or not is_wallet_address(user):
        return jsonify({'error': 'Invalid user address'}), 400

    try:
        tx_hash = relay_daily_claim(user, current_relayer())
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Relay daily claim log error for {user}: {e}")
        return jsonify({'error': 'Failed to record relayed claim'}), 500

    return jsonify({'success': True, 'txHash': tx_hash})


@relay_bp.route('/upgrade-membership', methods=['POST'])
def relay_upgrade_membership_route():
    data = request.get_json(silent=True) or {}
    user = data.get('user')
    target_level = data.get('targetLevel')

    if not user or not is_wallet_address(user):
        return jsonify({'error': 'Invalid user address'}), 400

    try:
        tx_hash = relay_membership_upgrade(user, target_level, current_relayer())
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Relay upgrade log error for {user}: {e}")
        return jsonify({'error': 'Failed to record relayed upgrade'}), 500

    return jsonify({'success': True, 'txHash': tx_hash})

from flask import Blueprint, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from blueprints.account import query_int
from utils.ranking_service import get_leaderboard, get_user_rankings

leaderboard_bp = Blueprint('leaderboard', __name__, url_prefix='/api')


# balance / earnings / streaks
@leaderboard_bp.route('/leaderboard/<metric>', methods=['GET'])
def leaderboard(metric):
    limit = query_int('limit', 50, minimum=1)

    try:
        entries = get_leaderboard(metric, limit=limit)
    except SQLAlchemyError as e:
        current_app.logger.error(f"Error fetching {metric} leaderboard: {e}")
        return jsonify({'error': 'Failed to fetch leaderboard'}), 500

    return jsonify({'leaderboard': entries})


@leaderboard_bp.route('/user-rankings/<wallet_address>', methods=['GET'])
def user_rankings(wallet_address):
    try:
        rankings = get_user_rankings(wallet_address)
    except SQLAlchemyError as e:
        current_app.logger.error(f"Error fetching user rankings for {wallet_address}: {e}")
        return jsonify({'error': 'Failed to fetch user rankings'}), 500

    return jsonify(rankings)

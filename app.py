from datetime import datetime, timezone
from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from extensions import db, migrate
from dotenv import load_dotenv
import os

# 提前导入模型注册函数（明确显示依赖关系）
from models import register_models

from blueprints.account import account_bp
from blueprints.invite import invite_bp
from blueprints.claim import claim_bp
from blueprints.leaderboard import leaderboard_bp
from blueprints.membership import membership_bp
from blueprints.relay import relay_bp
from commands import register_commands
from utils.errors import ApiError
from utils.relayer import RelayerClient

load_dotenv()

DEFAULT_CORS_ORIGINS = ','.join([
    'http://localhost:3000',
    'http://localhost:3001',
    'https://test-flight-six.vercel.app',
    'https://enb-crushers.vercel.app',
])


def register_error_handlers(app):

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        db.session.rollback()
        if error.status_code >= 500:
            app.logger.error(f"{type(error).__name__}: {error.message}", exc_info=error.__cause__)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        if isinstance(error, HTTPException):
            return jsonify({'error': error.description}), error.code
        db.session.rollback()
        app.logger.exception(f"Unhandled error: {error}")
        return jsonify({'error': 'Internal server error'}), 500


def create_app(config_overrides=None, relayer=None):
    app = Flask(__name__)

    # ===== 配置 =====
    app.config.update(
        SECRET_KEY=os.getenv('SECRET_KEY'),
        SQLALCHEMY_DATABASE_URI=os.getenv('DB_URI'),
        SQLALCHEMY_TRACK_MODIFICATIONS=False,
        WEB3_PROVIDER=os.getenv('WEB3_PROVIDER') or os.getenv('RPC_URL'),
        RELAYER_PRIVATE_KEY=os.getenv('RELAYER_PRIVATE_KEY') or os.getenv('PRIVATE_KEY'),
        CONTRACT_ADDRESS=os.getenv('CONTRACT_ADDRESS'),
        RELAYER_TX_TIMEOUT=int(os.getenv('RELAYER_TX_TIMEOUT', '120')),
        CORS_ORIGINS=os.getenv('CORS_ORIGINS', DEFAULT_CORS_ORIGINS),
        APP_ENV=os.getenv('APP_ENV', 'development'),
        ENABLE_SCHEDULER=os.getenv('ENABLE_SCHEDULER', 'False') == 'True',
    )
    if config_overrides:
        app.config.update(config_overrides)

    CORS(
        app,
        origins=[o.strip() for o in app.config['CORS_ORIGINS'].split(',') if o.strip()],
        methods=['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS'],
        allow_headers=['Content-Type', 'Authorization', 'Accept'],
        expose_headers=['Content-Length', 'Content-Type'],
        max_age=86400,
    )

    # ===== 初始化扩展 =====
    db.init_app(app)
    migrate.init_app(app, db)

    with app.app_context():
        register_models()

    # ===== Relayer：可注入（测试），否则按配置创建 =====
    if relayer is None:
        if app.config['WEB3_PROVIDER'] and app.config['RELAYER_PRIVATE_KEY'] and app.config['CONTRACT_ADDRESS']:
            relayer = RelayerClient.from_config(app.config)
        else:
            app.logger.warning("Relayer disabled: missing WEB3_PROVIDER, RELAYER_PRIVATE_KEY or CONTRACT_ADDRESS")
    app.extensions['relayer'] = relayer

    # ===== 注册蓝图 =====
    blueprints = [
        account_bp,
        invite_bp,
        claim_bp,
        leaderboard_bp,
        membership_bp,
        relay_bp,
    ]
    for bp in blueprints:
        app.register_blueprint(bp)

    register_error_handlers(app)
    register_commands(app)

    @app.route('/')
    def index():
        return 'ENB API is running.'

    # 健康检查
    @app.route('/health')
    def health_check():
        return jsonify({
            'status': 'ok',
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'environment': app.config['APP_ENV'],
        })

    return app


if __name__ == '__main__':
    from scheduler import start_scheduler  # 延迟导入
    app = create_app()
    if app.config['ENABLE_SCHEDULER']:
        start_scheduler(app)
    app.run(host='0.0.0.0', port=int(os.getenv('PORT', '8080')))

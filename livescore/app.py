from datetime import datetime, timezone

from flask import Flask

from .app_utils import make_error, make_ok
from .config import setup_logger
from .db import init_db

logger = setup_logger(__name__)


def create_app(init_database: bool = False) -> Flask:
    app = Flask(__name__)

    from .routes.admin import bp as admin_bp
    from .routes.blob_proxy import bp as blob_proxy_bp
    from .routes.news import bp as news_bp
    from .routes.pages import bp as pages_bp
    from .routes.proxy import bp as proxy_bp

    for bp in (proxy_bp, blob_proxy_bp, pages_bp, news_bp, admin_bp):
        app.register_blueprint(bp)
    app.logger.info("livescore_routes_registered: %d blueprints", len(app.blueprints))

    @app.route("/health", methods=["GET"])
    def health():
        return make_ok(
            {"ok": True, "ts": datetime.now(timezone.utc).isoformat()},
            "OK",
            status_code=200,
        )

    @app.errorhandler(404)
    def not_found(_exc):
        return make_error("not_found", "Resource not found", 404)

    if init_database:
        init_db()
    return app


app = create_app()


if __name__ == "__main__":
    init_db()
    app.run(debug=True, host="0.0.0.0", port=5000)

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from flask import Flask
from flask_cors import CORS

from authsvc.infrastructure.container import Container
from authsvc.shared.config import AppConfig, load_config
from authsvc.shared.logging import logger, setup_logging
from authsvc.shared.middleware.error_handler import configure_error_handling
from authsvc.shared.middleware.request_logger import configure_request_logging


def create_app(config: AppConfig | None = None, container: Container | None = None) -> Flask:
    config = config or load_config()
    container = container or Container(config)

    setup_logging(
        level="DEBUG" if config.debug_logging else config.log_level,
        log_file=config.log_file,
    )

    if config.store_backend == "sql":
        from authsvc.infrastructure.db import init_db

        init_db(container.db_engine)

    app = Flask(__name__)
    app.config.update(SECRET_KEY=config.secret_key)
    app.extensions["authsvc.container"] = container

    configure_error_handling(app, debug=config.debug_logging)
    configure_request_logging(app, debug=config.debug_logging)

    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": config.security.allowed_origins}}
    }
    CORS(app, **cors_kwargs)

    app.register_blueprint(container.auth_controller.as_blueprint())

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cache-Control", "no-store")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    logger.info(
        f"Flask app initialized (env={config.app_env}, store={config.store_backend}, "
        f"token_ttl={config.tokens.ttl_seconds}s)"
    )
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, threaded=True)

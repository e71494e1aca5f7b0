from flask import Flask

from nizk.config import ProverConfig
from nizk.routes import nizk_bp


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_prefixed_env("NIZK")
    if test_config is not None:
        app.config.update(test_config)

    app.extensions["nizk.config"] = ProverConfig.from_mapping(app.config)
    app.register_blueprint(nizk_bp)
    return app


if __name__ == "__main__":
    create_app().run(debug=True)

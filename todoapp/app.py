import os

from flask import Flask, jsonify, redirect, render_template, request, url_for
from flask_cors import CORS

from todoapp.utils.auth import current_identity
from todoapp.utils.logger import setup_logging


def create_app(config_object="todoapp.config.Config", mongo_client=None):
    """Build the application.

    ``mongo_client`` lets callers hand in an already constructed client
    (tests pass an in-memory one); otherwise one is created from
    ``MONGO_URI`` and the connection is checked before anything is served.
    """
    app = Flask(__name__)
    app.config.from_object(config_object)

    setup_logging(app.config.get("LOG_LEVEL", "INFO"))

    # Core extensions
    CORS(app, resources={r"/api/*": {"origins": "*"}})

    from todoapp.utils.db import init_app as init_db

    init_db(app, client=mongo_client)

    # Register blueprints
    from todoapp.routes.auth_routes import auth_bp
    from todoapp.routes.task_routes import tasks_bp

    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(tasks_bp, url_prefix="/todos")

    @app.before_request
    def log_request():
        app.logger.info("%s %s - %s", request.method, request.path, request.remote_addr)

    @app.context_processor
    def inject_user():
        return {"user": current_identity()}

    @app.get("/")
    def index():
        if current_identity() is not None:
            return redirect(url_for("tasks.list_tasks"))
        return render_template("index.html", title="Todo App")

    @app.get("/api/health")
    def health():
        return jsonify(status="ok", service="Todo App"), 200

    @app.errorhandler(404)
    def not_found(_):
        app.logger.warning("404 - Page not found: %s", request.path)
        if request.path.startswith("/api/"):
            return jsonify(error="Not Found"), 404
        return (
            render_template(
                "error.html",
                title="Page Not Found",
                message="The page you are looking for does not exist",
                status=404,
            ),
            404,
        )

    @app.errorhandler(500)
    def server_error(exc):
        app.logger.error("Unhandled error on %s %s: %s", request.method, request.path, exc)
        if request.path.startswith("/api/"):
            return jsonify(error="Internal Server Error"), 500
        message = str(getattr(exc, "original_exception", exc)) if app.debug else "Something went wrong"
        return render_template("error.html", title="Error", message=message, status=500), 500

    return app


if __name__ == "__main__":
    # Direct run support: python -m todoapp.app
    create_app().run(
        host=os.environ.get("HOST", "127.0.0.1"),
        port=int(os.environ.get("PORT", "5000")),
        debug=os.environ.get("FLASK_DEBUG", "1") == "1",
    )

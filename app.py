import os

from todoapp.app import create_app

# Expose a module-level `app` for WSGI servers (gunicorn expects `app:app`).
# Building it connects to MongoDB; an unreachable server stops the process here.
app = create_app()


if __name__ == "__main__":
    # Local development only: run the built-in server.
    port = int(os.environ.get("PORT", 5000))
    app.run(host="0.0.0.0", port=port, debug=app.config["DEBUG"])

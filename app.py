"""Local entry point: ``python app.py`` after ``pip install -e .``."""

from attendease.main import create_app

app = create_app()


if __name__ == "__main__":
    app.run(host="127.0.0.1", port=5000, debug=bool(app.config.get("DEBUG")))

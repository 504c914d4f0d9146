"""Development entry point: ``python app.py`` serves the API on port 4000."""

import os

from src.project_tracker.project_tracker.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "4000")), debug=app.config["DEBUG"])

import importlib
import os

from dotenv import load_dotenv

load_dotenv(override=False)

from config import get_settings_module  # noqa: E402
from hr_attendance.main import create_app  # noqa: E402

app = create_app(importlib.import_module(get_settings_module()))

if __name__ == "__main__":
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "5000")), debug=app.config["DEBUG"])

import os

# Must be set before the app context loads config.yaml
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("LOG_FILE", "")

from tests.fixtures import *  # noqa: E402,F401,F403

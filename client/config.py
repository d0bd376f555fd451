"""Configuration settings for the data service client."""

import os

from common.constants import CLIENT_MAX_RETRIES, CLIENT_TIMEOUT_SECONDS


TIMEOUT_SECONDS = float(os.environ.get("DATA_SERVICE_TIMEOUT", CLIENT_TIMEOUT_SECONDS))

MAX_RETRIES = int(os.environ.get("DATA_SERVICE_MAX_RETRIES", CLIENT_MAX_RETRIES))

"""Configuration settings for the data server."""

import os
from typing import Optional

from common.constants import DEFAULT_GRACE_PERIOD_SECONDS


DATA_SERVICE_HOST: Optional[str] = os.environ.get("DATA_SERVICE_HOST")

DATA_SERVICE_PORT: Optional[str] = os.environ.get("DATA_SERVICE_PORT")

GRACE_PERIOD_SECONDS = float(os.environ.get("DATA_SERVICE_GRACE_PERIOD", DEFAULT_GRACE_PERIOD_SECONDS))

"""
Runtime knobs, read from the environment (and a .env file if one exists).

The normalization rules themselves are fixed in rules.py; only how the tool
runs is configurable here. CLI flags override these defaults.
"""

import os
from dotenv import load_dotenv
load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes", "on")


LOG_LEVEL = os.getenv("RECNORM_LOG_LEVEL", "INFO")
DETECT_ENCODING = _flag("RECNORM_DETECT_ENCODING")
FAIL_ON_ERROR = _flag("RECNORM_FAIL_ON_ERROR")

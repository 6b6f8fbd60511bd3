"""
Pytest configuration.

Puts the project root on sys.path and pins the settings the tests rely on
before anything imports app.config, so a developer's .env cannot leak in.
"""

import os
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

os.environ["ENVIRONMENT"] = "testing"
os.environ["HOUSEHOLD_TIMEZONE"] = "UTC"
os.environ["API_PREFIX"] = ""
os.environ["GOOGLE_TRANSLATE_API_KEY"] = ""

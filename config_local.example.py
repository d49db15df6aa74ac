# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env` for everything else. Only these names are picked up.
"""

# Example: listen on all interfaces locally
# HOST = "0.0.0.0"
# PORT = 8080

# Example: hide /docs and /openapi.json
# DOCS_ENABLED = False

# LOG_LEVEL = "DEBUG"

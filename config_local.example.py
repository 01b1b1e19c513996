# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env`. This file should contain only safe overrides.
"""

# Example: point at a staging backend
# API_BASE_URL = "http://staging.internal:5000/api"

# Example: chattier console
# LOG_LEVEL = "DEBUG"

# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Use:
- .env (local, gitignored)
- config_local.py (local safe overrides, gitignored)

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TASKBOARD_APP_NAME": "App display name (default: taskboard).",
    "TASKBOARD_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Task API
    "TASKBOARD_API_BASE_URL": "Base URL of the task backend (default: http://localhost:5000/api).",
    "TASKBOARD_API_URL": "Alias for TASKBOARD_API_BASE_URL.",
    "TASKBOARD_API_TIMEOUT_SECONDS": "Optional request timeout; empty or 0 => wait indefinitely.",
    # Paths (gitignored)
    "TASKBOARD_DATA_DIR": "Local data directory for logs (default: .local/taskboard).",
}

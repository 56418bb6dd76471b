# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "WORKLIST_APP_NAME": "App display name, used as the console prompt (default: worklist).",
    "WORKLIST_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Task service
    "WORKLIST_API_BASE_URL": "Task service base URL (default: http://localhost:8080/api/tasks).",
    "WORKLIST_HTTP_TIMEOUT_SECONDS": "Optional request timeout; unset keeps the httpx default.",
    # Console
    "WORKLIST_CONFIRM_DELETE": "Ask before deleting a task (true/false, default: true).",
    # Paths (gitignored)
    "WORKLIST_DATA_DIR": "Local data directory for worklist.log (default: .local/worklist).",
}

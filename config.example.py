# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKLOG_APP_NAME": "App display name (default: tasklog).",
    "TASKLOG_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Connectors
    "TASKLOG_CONSOLE_ENABLED": "Run the interactive console (true/false, default: true).",
    # Paths (gitignored)
    "TASKLOG_DATA_DIR": "Local data directory for the database and tasklog.log (default: .local/tasklog).",
    "TASKLOG_TASKS_DB_PATH": "TaskStore SQLite path (default: <data_dir>/task_db.sqlite3).",
}

# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name (default: todo).",
    "TODO_LOG_LEVEL": "Console logging level (default: WARNING). The log file always gets DEBUG.",
    # Paths (gitignored)
    "TODO_DATA_DIR": "Local data directory (default: .local/todo).",
    "TODO_STORAGE_PATH": "Key-value SQLite path (default: <data_dir>/storage.sqlite3).",
    # Storage keys
    "TODO_TASKS_KEY": "Key holding the JSON task array (default: todoApp_tasks).",
    "TODO_COUNTER_KEY": "Key holding the next task id (default: todoApp_taskIdCounter).",
    # Behaviour
    "TODO_MAX_TEXT_LENGTH": "Maximum task text length after trimming (default: 200).",
    "TODO_ERROR_CLEAR_SECONDS": "Seconds before an error message is cleared (default: 3.0).",
    "TODO_CONFIRM_DELETES": "Ask before /delete and /clear (true/false, default: true).",
    "TODO_EPHEMERAL": "Keep tasks in memory only, nothing written to disk (true/false).",
}

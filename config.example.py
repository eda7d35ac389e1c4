# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name (default: todo-list).",
    "TODO_LOG_LEVEL": "Logging level (default: INFO).",
    "TODO_LOG_TO_FILE": "Also write full logs to <data_dir>/todo-list.log (true/false, default: true).",
    # HTTP
    "TODO_HTTP_HOST": "Listen address (default: 0.0.0.0).",
    "TODO_HTTP_PORT": "Listen port (default: 8080).",
    # Paths (gitignored)
    "TODO_DATA_DIR": "Local data directory (default: .local/todo-list).",
    "TODO_TASKS_DB_PATH": "TaskStore SQLite path (default: <data_dir>/tasks.sqlite3).",
    "TODO_TASKS_COLLECTION": "Table holding task documents (default: tasks).",
}

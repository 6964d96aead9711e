# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "SPARK_TODO_APP_NAME": "App name, also the per-user folder name (default: Spark-Todo).",
    "SPARK_TODO_LOG_LEVEL": "Console logging level (default: INFO).",
    # Paths
    "SPARK_TODO_DATA_DIR": "Data directory (default: per-user config dir / <app name>).",
    "SPARK_TODO_DB_PATH": "SQLite database file (default: <data_dir>/todo.db).",
    "SPARK_TODO_LOG_DIR": "Where spark-todo.log is written (default: <data_dir>).",
    # Store
    "SPARK_TODO_BUSY_TIMEOUT_MS": "How long to wait on a locked database before failing (default: 5000).",
    "SPARK_TODO_DEFAULT_GROUP_NAME": "Name of the group created on first start (default: 默认).",
    # Reminder
    "SPARK_TODO_REMINDER_INTERVAL_MINUTES": "Minimum gap between two reminders (default: 60).",
}

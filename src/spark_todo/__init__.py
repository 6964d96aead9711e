"""
spark_todo: local SQLite persistence for the Spark-Todo desktop app.

Packages:
- store/: connection, migrations, defaults, repositories, TodoStore facade
- app/: TodoService, the operations a front-end bridge calls
- cli/: `spark-todo` entrypoint (open/upgrade the data file, dump the board)
"""

__version__ = "0.1.0"

"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, TaskInput, TaskFilter)
- task_store.py: SQLite-backed task collection (find/insert/update/delete by filter)
- task_service.py: lifecycle & query engine used by the HTTP layer
"""

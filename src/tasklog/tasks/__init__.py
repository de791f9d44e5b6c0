"""
Task subsystem.

Components:
- task_models.py: Task value type
- task_store.py: SQLite-backed storage (async CRUD) + StorageError
- task_controller.py: observable task list mediating user intents into the store
- task_editing.py: edit confirmation (confirmed text or cancellation)
"""

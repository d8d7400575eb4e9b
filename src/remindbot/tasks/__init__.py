"""
Task subsystem.

Components:
- task_models.py: data structures (Task)
- task_store.py: in-memory storage guarded by the shared state lock
- task_scheduler.py: polling scanner that delivers due reminders
- task_api.py: entry parsing and listing helpers used by the dispatcher
"""

"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStats) + record (de)serialization
- errors.py: exception hierarchy used by the store and the UI layer
- task_store.py: in-memory authoritative collection with CRUD + persistence
"""

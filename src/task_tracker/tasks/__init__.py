"""
Task subsystem.

Components:
- task_models.py: data structures (Task, DependencyValidationResult, CompletionOutcome)
- task_store.py: in-memory concurrent store, dependency validation, completion protocol
- task_api.py: input checks and messages shared by transports
"""

"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, request types, TaskDraft)
- task_validator.py: client-side draft validation
- task_api.py: async HTTP gateway for the task service
- task_store.py: in-memory mirror of server-confirmed tasks
- task_form.py: create/edit form controller
- task_presenter.py: read-only list view (overdue flag, display values)
"""

"""Board activity trail package.

Records who did what on a kanban board and renders those events as readable
sentences for feeds and notifications.
"""

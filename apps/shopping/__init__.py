"""
Shopping App - Shopping Lists

Stores shopping lists and their items. The prices app reads list items to
plan store visits; this app only persists them.
"""

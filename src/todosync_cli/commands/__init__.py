"""Command modules for todosync."""

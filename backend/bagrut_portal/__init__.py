"""Bagrut portal backend: exam archive, forums and messaging over a local key-value store."""

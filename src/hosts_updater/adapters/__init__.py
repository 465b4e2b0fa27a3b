"""Adapters: HTTP fetching, hosts-file persistence, privilege checks.

Pure I/O; the grammar and merge logic stay in `core`.
"""

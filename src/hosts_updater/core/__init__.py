"""Core: grammar, managed-section codec and update orchestration.

Nothing in here touches the network or the filesystem; adapters do.
"""

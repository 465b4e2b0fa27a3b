"""Domain models and error taxonomy.

Pure, strict data structures (Pydantic v2) plus the exceptions the
validators raise. No HTTP, CLI or filesystem knowledge lives here.
"""

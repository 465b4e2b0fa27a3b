"""hosts-updater: periodic hosts-file aggregation with a managed section."""

__version__ = "0.1.0"

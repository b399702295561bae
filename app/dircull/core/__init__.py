"""Core configuration, size handling and run orchestration."""

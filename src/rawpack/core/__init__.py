"""
Shared configuration, error types and logging setup.
"""

"""
Core utilities shared across the RevCart auth API.

This package hosts configuration helpers (env vars), logging bootstrap,
password hashing/credential checks and the email adapter. Services depend on
these primitives instead of reading the environment or talking SMTP directly.
"""

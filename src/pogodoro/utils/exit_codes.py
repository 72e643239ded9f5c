"""
Exit codes for pogodoro.

Each error class the CLI can surface maps to one code, so scripts wrapping
`pogodoro` can tell a typo from a missing task from a broken database.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error (non-positive durations, blank description)
ERROR_INVALID_ARGS = 2

# Task database could not be opened, read or written
ERROR_STORE_UNAVAILABLE = 4

# Task not found
ERROR_NOT_FOUND = 5

"""Command-line adapter package.

Scope:
- Terminal interaction and exit-code mapping only.
- No protocol logic is implemented in this package.
"""

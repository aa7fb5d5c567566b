"""Transfer domain package.

This package contains the domain model for composing a bank transfer:
the draft, its field validators and formatters, and draft validation.
"""

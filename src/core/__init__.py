"""
Core domain models, typed errors, and contract validators.

This module contains the foundational building blocks that are independent
of the custodian engine and of the ledger collaborators.
"""

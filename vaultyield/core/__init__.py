"""
Core domain models, fixed-point primitives, and payload contracts.

This module contains the foundational building blocks that are independent
of external systems (indexing service, wallets, RPC nodes, etc.).
"""

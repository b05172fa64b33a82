"""
vaultyield — APY & volume analytics for order vaults.

Turns an ordered trade history into per-vault volume, per-vault APY and an
order-level APY denominated in one of the order's own tokens.
"""

__version__ = "0.1.0"

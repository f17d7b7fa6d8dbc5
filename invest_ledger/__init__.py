"""Personal investment bookkeeping: wallets, orders and reference prices."""

__version__ = "0.1.0"

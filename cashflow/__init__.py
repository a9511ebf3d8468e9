"""
CashFlow Bookkeeper - Source Package

A bookkeeping core for sole traders and households that turns bank
statement lines into tax-categorised transactions and GST/BAS views.

DESIGN PRINCIPLES:
1. Classification is a pure function of (description, amount)
2. Transactions are replaced, never mutated
3. Every view is recomputed from the full snapshot
4. Unmatched data degrades to a catch-all, never to an exception
5. Storage layer is swappable
"""

__version__ = "2.1.0"
__author__ = "CashFlow Bookkeeper Team"

# backend/modules/loyalty/__init__.py

"""
Loyalty points: balances per phone number and their transaction log.
"""

"""
GSL Guest Stay Accounts Engine
================================
Guest stay account lifecycle: check-in, charges, payments, check-out.
State is derived from the account stream; nothing is stored mutably.
"""

"""
Sigil - Signing key handling for Courier.
"""

"""
Shared helpers for the Posty5 client: HTTP utilities, error mapping and
input validation.
"""

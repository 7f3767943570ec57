"""
User Profiles Infrastructure Layer

Persistence implementations of the domain repository contracts.
"""

"""
Feature modules of the application server.
"""

"""
Command Line Interface for ktbridge.
"""

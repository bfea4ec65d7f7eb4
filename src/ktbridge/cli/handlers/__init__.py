"""
CLI Handlers Package.

Each module implements one subcommand.
"""

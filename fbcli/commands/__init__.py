"""
This __init__.py file makes the 'commands' directory a Python package.

Each module defines handlers for one group of CLI commands; a handler takes
an ``args`` object carrying the command's options.
"""

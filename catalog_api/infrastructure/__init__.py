"""Infrastructure module.

Configuration, logging setup and document store client management.
"""

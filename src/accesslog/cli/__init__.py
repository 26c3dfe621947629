"""
Command line interface for accesslog.
"""

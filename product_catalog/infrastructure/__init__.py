"""
Infrastructure Module

Cache backends, the reference catalog store, and monitoring.
"""

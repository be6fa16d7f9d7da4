"""
Background polling tasks
"""

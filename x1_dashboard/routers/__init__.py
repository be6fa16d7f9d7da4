"""
Dashboard API routers
"""

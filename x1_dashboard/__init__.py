"""
X1 Dashboard - polling metrics layer for the X1 blockchain dashboard
"""

__version__ = "0.1.0"

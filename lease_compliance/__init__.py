"""
Lease Compliance - ASC 842 / IFRS 16 schedule and journal engine
"""

__version__ = "1.0.0"

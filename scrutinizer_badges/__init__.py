"""
Scrutinizer Badges: code quality and coverage badges from Scrutinizer CI reports.
"""

__version__ = "0.1.0"

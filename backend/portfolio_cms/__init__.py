"""
Portfolio CMS - credential service and encrypted record store behind the
portfolio/team website admin area.
"""

__version__ = "1.0.0"

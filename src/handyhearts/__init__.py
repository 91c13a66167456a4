"""
HandyHearts Package

Quote and checkout backend for the HandyHearts senior tech-support and care
marketplace. Prices bookings in integer cents via Service → Hours → Surcharges.
"""

__version__ = "1.0.0"

"""
LightBnB data access layer.
Parameterized queries over users, properties, reservations and property reviews.
"""

__version__ = "1.0.0"

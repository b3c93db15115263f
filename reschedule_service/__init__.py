"""
Reschedule Negotiation Service.

Detects schedule conflicts for a contractor's day and coordinates the
alternative-time and route-optimization negotiations between contractors
and their customers.
"""

__version__ = "0.1.0"
__description__ = "Schedule conflict resolution and reschedule negotiation"

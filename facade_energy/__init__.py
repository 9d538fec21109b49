"""
Facade Energy - building heat-gain and cooling cost estimation.

Estimates solar heat gain through building facades and skylights, the
resulting cooling load, electricity consumption and cooling cost for a set
of reference cities and seasons.
"""

__version__ = "1.0.0"

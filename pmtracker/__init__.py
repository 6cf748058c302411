"""
Facility PM Tracker: recurring preventative maintenance and calibration
scheduling with compliance reporting.
"""

__version__ = "1.0.0"

"""
meetingfinder - find the times of day at which a meeting can take place.
"""

__version__ = "0.1.0"

"""Deployment Window - schedule and announce deployment window requests"""

__version__ = "0.1.0"

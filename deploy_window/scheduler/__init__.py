"""Scheduler package.

- digest.py: daily digest + late-addition alert
- runner.py: APScheduler job firing the digest once a day
"""
from .digest import DigestResult, DigestService
from .runner import DigestScheduler

__all__ = ["DigestResult", "DigestService", "DigestScheduler"]

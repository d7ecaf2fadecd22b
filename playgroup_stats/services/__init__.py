"""
Services package: database-backed entry points to the statistics engine.
"""

from .base import BaseService
from .statistics import StatisticsService

__all__ = ['BaseService', 'StatisticsService']

"""
Playgroup statistics engine for Commander game tracking.

Turns a playgroup's recorded games into player, commander, playgroup and trend
reports. Reports are recomputed from a full snapshot on every request.
"""

from playgroup_stats.data_models.settings import StatisticsSettings
from playgroup_stats.operations.engine import StatisticsEngine

__all__ = ['StatisticsEngine', 'StatisticsSettings']

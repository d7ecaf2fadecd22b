"""
Operations layer - the statistics aggregation engine.

Pure computations over a PlaygroupSnapshot; nothing here performs I/O.

- IdentityResolver: member/guest and user/non-user resolution
- ResultClassifier: tie-aware winners and positions
- PlayerStatisticsAggregator, CommanderStatisticsAggregator,
  PlaygroupMetricsAggregator: per-report aggregation
- TrendEngine: rolling win rates, seat analysis, monthly histogram
- StatisticsEngine: facade running all of the above
"""

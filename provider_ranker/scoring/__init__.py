"""
Scoring core: turns a provider record set into a ranked, scored view.

Modules
-------
normalizer : compute_reference() — best-in-set reference values with the floor-to-1 rule.
scorer     : CRITERIA_WEIGHTS + score_provider() / score_providers() — pure functions.
ranker     : sort_providers() + select_best() + rank_providers() -> RankedView.
stats      : compute_stats() — header aggregates (count, averages).

Nothing in this package performs I/O.
"""

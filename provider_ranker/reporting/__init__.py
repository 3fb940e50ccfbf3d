"""
Terminal reporting for the provider ranking.

Modules
-------
formatters : format_ranking_table() + format_stats_summary()
             + format_breakdown_chart() — pure string builders.
"""

"""
ASCII terminal formatters for the ranking table, stats header and chart.

All formatters take engine output (scored providers, stats) and return plain
multi-line strings suitable for ``typer.echo()``.  No third-party
dependencies (no ``rich``, no ``colorama``).

Ranking table
-------------
Providers appear in the order given (the ranker has already sorted them).
The best provider row is flagged; a score of 0 shows as "Not Rated"::

    Provider                 Price  Quality       Time     Capacity  Score
    ------------------------------------------------------------------------
    Acme Supply             $10.00     8/10     5 days    100 units   81.0  * Best
    Beta Parts              $20.00    10/10     2 days     50 units   77.5

Chart
-----
One stacked bar per provider on a 100-point axis, one glyph per criterion,
followed by the per-criterion values (one decimal).
"""

from __future__ import annotations

from typing import Optional, Sequence

from provider_ranker.models.provider import ProviderId, ProviderStats, ScoredProvider

NO_DATA_MESSAGE = "No provider data available to display analytics."

CHART_SERIES: tuple[tuple[str, str], ...] = (
    ("Price Score (30%)",    "$"),
    ("Quality Score (35%)",  "#"),
    ("Time Score (20%)",     "~"),
    ("Capacity Score (15%)", "="),
)
CHART_WIDTH = 50    # characters for a full 100-point bar


# ── Cell helpers ──────────────────────────────────────────────────────────────


def _fmt_number(value: Optional[float]) -> str:
    if value is None:
        return "-"
    return f"{value:g}"


def _fmt_price(value: Optional[float]) -> str:
    return "-" if value is None else f"${value:.2f}"


def format_score_cell(provider: ScoredProvider, is_best: bool) -> str:
    """Score column text: the score, a best marker, or "Not Rated" for 0."""
    if not provider.is_rated:
        return "Not Rated"
    cell = f"{provider.score:.1f}"
    if is_best:
        cell += "  * Best"
    return cell


# ── Stats ─────────────────────────────────────────────────────────────────────


def format_stats_values(stats: ProviderStats) -> dict[str, str]:
    """Display strings for each header figure.

    Empty stats render as ``"0"``, ``"0"``, ``"$0"``, ``"0"``.
    """
    if stats.total == 0:
        return {
            "total_providers": "0",
            "avg_quality":     "0",
            "avg_price":       "$0",
            "avg_time":        "0",
        }
    return {
        "total_providers": str(stats.total),
        "avg_quality":     f"{stats.avg_quality:.1f}",
        "avg_price":       f"${stats.avg_price:.2f}",
        "avg_time":        f"{stats.avg_time} days",
    }


def format_stats_summary(stats: ProviderStats) -> str:
    """Return the stats header block."""
    values = format_stats_values(stats)
    return "\n".join([
        "",
        "=== Provider Stats ===",
        f"  Total providers:  {values['total_providers']}",
        f"  Avg quality:      {values['avg_quality']}",
        f"  Avg price:        {values['avg_price']}",
        f"  Avg lead time:    {values['avg_time']}",
    ])


# ── Ranking table ─────────────────────────────────────────────────────────────


def format_ranking_table(
    providers: Sequence[ScoredProvider],
    best_id:   Optional[ProviderId],
) -> str:
    """Format the ranked providers as an ASCII table.

    Args:
        providers: Scored providers in display order.
        best_id:   Id of the best provider (flagged in the score column).

    Returns:
        Multi-line string; an empty-state notice when ``providers`` is empty.
    """
    lines: list[str] = ["", f"=== Provider Ranking ({len(providers)}) ==="]

    if not providers:
        lines.append("")
        lines.append("  (no providers yet — load a provider set into the store)")
        return "\n".join(lines)

    header = (
        f"  {'Provider':<22}  {'Price':>10}  {'Quality':>7}  "
        f"{'Time':>9}  {'Capacity':>11}  {'Score':>5}"
    )
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))

    for p in providers:
        quality = "-" if p.quality is None else f"{_fmt_number(p.quality)}/10"
        time    = "-" if p.time is None else f"{_fmt_number(p.time)} days"
        cap     = "-" if p.capacity is None else f"{_fmt_number(p.capacity)} units"
        lines.append(
            f"  {p.name[:22]:<22}  {_fmt_price(p.price):>10}  {quality:>7}  "
            f"{time:>9}  {cap:>11}  "
            f"{format_score_cell(p, is_best=p.id == best_id):>5}"
        )

    return "\n".join(lines)


# ── Chart ─────────────────────────────────────────────────────────────────────


def _bar(breakdown: Sequence[float], width: int) -> str:
    segments = []
    for (_, glyph), value in zip(CHART_SERIES, breakdown):
        segments.append(glyph * int(round(value / 100.0 * width)))
    return "".join(segments)


def format_breakdown_chart(
    providers: Sequence[ScoredProvider],
    width:     int = CHART_WIDTH,
) -> str:
    """Stacked ASCII bar chart of each provider's score breakdown.

    Args:
        providers: Scored providers, highest score first.
        width:     Characters representing the full 100-point axis.

    Returns:
        Multi-line string, or ``NO_DATA_MESSAGE`` when ``providers`` is empty.
    """
    if not providers:
        return NO_DATA_MESSAGE

    name_w = min(max(len(p.name) for p in providers), 22)
    lines: list[str] = ["", "=== Overall Performance Score ==="]
    lines.append(
        "  Legend: " + "  ".join(f"{glyph} {label}" for label, glyph in CHART_SERIES)
    )
    lines.append("")

    for p in providers:
        bar = _bar(p.breakdown, width)
        parts = " / ".join(f"{v:.1f}" for v in p.breakdown)
        lines.append(f"  {p.name[:name_w]:<{name_w}} |{bar:<{width}}| {p.score:5.1f}  ({parts})")

    lines.append(f"  {'':<{name_w}}  0{'':<{width - 4}}100")
    return "\n".join(lines)

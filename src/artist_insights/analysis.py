from __future__ import annotations

from collections import Counter

from artist_insights.models import UnifiedTrack

_SDG_METRICS = ("sdg_4_education", "sdg_10_equality", "sdg_16_peace_justice")


def _mean(values: list[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def social_impact_score(analysis: dict) -> float:
    """Mean of the three SDG impact metrics of one lyrical analysis."""
    metrics = analysis.get("impact_metrics") or {}
    return _mean([float(metrics.get(name, 0)) for name in _SDG_METRICS])


def theme_distribution(analyses: list[dict]) -> dict[str, float]:
    totals: Counter[str] = Counter()
    for analysis in analyses:
        for theme, score in (analysis.get("themes") or {}).items():
            totals[theme] += score
    return dict(totals)


def cross_platform_summary(
    tracks: list[UnifiedTrack],
    analyses: list[dict],
    platforms_connected: int,
) -> dict:
    return {
        "platform_distribution": dict(Counter(t.platform for t in tracks)),
        "total_tracks": len(tracks),
        "total_streams": sum(t.stream_count or 0 for t in tracks),
        "average_popularity": _mean([float(t.popularity) for t in tracks]),
        "lyrical_themes": theme_distribution(analyses),
        "platforms_connected": platforms_connected,
        "social_impact_score": _mean([social_impact_score(a) for a in analyses]),
    }

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def seconds_between(earlier: datetime, later: datetime) -> float:
    return (later - earlier).total_seconds()


def resolve_year(production_year: int | None, premiere_date: date | None) -> int | None:
    """Production year wins; otherwise the premiere date's year; otherwise unresolved."""
    if production_year:
        return production_year
    if premiere_date is not None:
        return premiere_date.year
    return None

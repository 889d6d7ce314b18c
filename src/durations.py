"""Human-readable rendering of minute counts."""

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR


def format_duration(minutes: int) -> str:
    """Format minutes as "N minutes", "H hours[, M minutes]" or "D days[, H hours][, M minutes]".

    Units are never singularised ("1 hours"); output is stable for scripting.
    """
    if minutes < MINUTES_PER_HOUR:
        return f"{minutes} minutes"
    if minutes < MINUTES_PER_DAY:
        hours, mins = divmod(minutes, MINUTES_PER_HOUR)
        if mins == 0:
            return f"{hours} hours"
        return f"{hours} hours, {mins} minutes"
    days, remaining = divmod(minutes, MINUTES_PER_DAY)
    hours, mins = divmod(remaining, MINUTES_PER_HOUR)
    parts = [f"{days} days"]
    if hours > 0:
        parts.append(f"{hours} hours")
    if mins > 0:
        parts.append(f"{mins} minutes")
    return ", ".join(parts)

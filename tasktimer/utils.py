import time


def now_ms() -> int:
    """Current wall-clock time as integer epoch milliseconds"""
    return int(time.time() * 1000)


def format_duration(total_seconds: int) -> str:
    """
    Format elapsed seconds for display.

    Args:
        total_seconds: Whole seconds (negative values are shown as zero)

    Returns:
        String like "0d 01:02:03"
    """
    total_seconds = max(0, int(total_seconds))
    days, remainder = divmod(total_seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{days}d {hours:02d}:{minutes:02d}:{seconds:02d}"

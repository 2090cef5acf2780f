from __future__ import annotations


def format_duration(milliseconds: float) -> str:
    """Render a duration as zero-padded ``HH:MM:SS``.

    Hours are not wrapped at 24, so 90000000 ms renders as ``25:00:00``.
    """
    total_seconds = max(0, int(milliseconds // 1000))
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"

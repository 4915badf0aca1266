from __future__ import annotations

from datetime import datetime


def format_price(price: float) -> str:
    """en-US currency rendering, e.g. ``$1,234.50`` and ``-$1.25``."""
    sign = "-" if price < 0 else ""
    return f"{sign}${abs(price):,.2f}"


def format_change(change: float, change_pct: float) -> dict[str, str]:
    direction = "up" if change >= 0 else "down"
    return {
        "direction": direction,
        "text": f"{format_price(abs(change))} ({abs(change_pct):.2f}%)",
    }


def format_volume(volume: int) -> str:
    return f"{int(volume):,}"


def format_timestamp(now: datetime | None = None) -> str:
    current = now or datetime.now()
    hour = current.hour % 12 or 12
    suffix = "AM" if current.hour < 12 else "PM"
    return f"{hour}:{current.minute:02d}:{current.second:02d} {suffix}"

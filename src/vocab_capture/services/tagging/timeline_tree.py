"""Timeline tree - reshape flat date tags into year / month / day navigation nodes."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from vocab_capture.core import TagCount, TagType

YEAR_LEVEL = 0
MONTH_LEVEL = 1
DAY_LEVEL = 2


@dataclass
class TimeTag:
    year: int
    month: Optional[int] = None
    day: Optional[int] = None


@dataclass
class TimelineNode:
    id: str
    label: str
    level: int
    count: int
    tag_name: str
    children: List["TimelineNode"] = field(default_factory=list)


@dataclass
class TimelineTree:
    years: List[TimelineNode] = field(default_factory=list)


def parse_time_tag(tag_name: str) -> Optional[TimeTag]:
    """Parse ``YYYY``, ``YYYY-MM`` or ``YYYY-MM-DD``; None if not a date tag."""
    parts = tag_name.split("-")
    if not 1 <= len(parts) <= 3:
        return None
    try:
        numbers = [int(part) for part in parts]
    except ValueError:
        return None
    return TimeTag(*numbers)


def build_timeline_tree(tags: Iterable[TagCount]) -> TimelineTree:
    """
    Build the year -> month -> day tree from ``auto_date`` tags.

    Counts come from the exact tag at each level (``2024``, ``2024-03``,
    ``2024-03-07``), 0 when that tag is absent. Only day tags create day
    nodes; a month is shown only when it has days, and a year only when it
    has months or a nonzero count of its own. Years are newest first, and
    months and days are likewise in descending numeric order.

    Args:
        tags: Tag rows with counts, of any type. Non-date tags are ignored.

    Returns:
        TimelineTree whose ``years`` are ready for display.
    """
    date_counts: Dict[str, int] = {}
    for tag in tags:
        if tag.type == TagType.AUTO_DATE:
            date_counts[tag.name] = tag.count

    year_map: Dict[int, Dict[int, Dict[int, Tuple[str, int]]]] = {}
    for name, count in date_counts.items():
        parsed = parse_time_tag(name)
        if parsed is None:
            continue

        month_map = year_map.setdefault(parsed.year, {})
        if parsed.month is None:
            continue
        day_map = month_map.setdefault(parsed.month, {})
        if parsed.day is not None:
            day_map[parsed.day] = (name, count)

    years: List[TimelineNode] = []
    for year, month_map in sorted(year_map.items(), reverse=True):
        year_tag = str(year)
        year_node = TimelineNode(
            id=f"year-{year}",
            label=year_tag,
            level=YEAR_LEVEL,
            count=date_counts.get(year_tag, 0),
            tag_name=year_tag,
        )

        for month, day_map in sorted(month_map.items(), reverse=True):
            month_tag = f"{year}-{month:02d}"
            month_node = TimelineNode(
                id=f"month-{year}-{month}",
                label=f"{month:02d}",
                level=MONTH_LEVEL,
                count=date_counts.get(month_tag, 0),
                tag_name=month_tag,
            )
            for day, (day_tag, day_count) in sorted(day_map.items(), reverse=True):
                month_node.children.append(
                    TimelineNode(
                        id=f"day-{year}-{month}-{day}",
                        label=f"{day:02d}",
                        level=DAY_LEVEL,
                        count=day_count,
                        tag_name=day_tag,
                    )
                )
            if month_node.children:
                year_node.children.append(month_node)

        if year_node.children or year_node.count > 0:
            years.append(year_node)

    return TimelineTree(years=years)

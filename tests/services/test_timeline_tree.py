"""Unit tests for the timeline tree builder."""

from vocab_capture.core import TagCount, TagType
from vocab_capture.services import TimeTag, build_timeline_tree, parse_time_tag


def date_tag(name, count):
    return TagCount(name=name, type=TagType.AUTO_DATE, count=count)


class TestParseTimeTag:

    def test_year(self):
        assert parse_time_tag("2024") == TimeTag(2024)

    def test_year_month(self):
        assert parse_time_tag("2024-03") == TimeTag(2024, 3)

    def test_year_month_day(self):
        assert parse_time_tag("2024-03-07") == TimeTag(2024, 3, 7)

    def test_non_numeric_segment(self):
        assert parse_time_tag("2024-xx") is None
        assert parse_time_tag("english") is None

    def test_too_many_segments(self):
        assert parse_time_tag("2024-03-07-01") is None

    def test_empty_segment(self):
        assert parse_time_tag("2024--07") is None


class TestBuildTimelineTree:

    def test_year_month_day_hierarchy(self):
        tree = build_timeline_tree([
            date_tag("2023", 5),
            date_tag("2023-01", 2),
            date_tag("2023-01-15", 2),
            date_tag("2023-01-16", 0),
        ])

        assert len(tree.years) == 1
        year = tree.years[0]
        assert year.label == "2023"
        assert year.tag_name == "2023"
        assert year.count == 5
        assert year.level == 0
        assert year.id == "year-2023"

        assert len(year.children) == 1
        month = year.children[0]
        assert month.label == "01"
        assert month.tag_name == "2023-01"
        assert month.count == 2
        assert month.level == 1

        assert {day.tag_name for day in month.children} == {"2023-01-15", "2023-01-16"}
        assert all(day.level == 2 and day.children == [] for day in month.children)
        counts = {day.label: day.count for day in month.children}
        assert counts == {"15": 2, "16": 0}

    def test_only_date_tags_are_used(self):
        tree = build_timeline_tree([
            TagCount("english", TagType.AUTO_LANGUAGE, 3),
            TagCount("2024", TagType.CUSTOM, 3),
            date_tag("2024-02-01", 1),
            date_tag("2024-02", 1),
        ])
        assert len(tree.years) == 1
        # "2024" exists only as a custom tag, so the year has no count of its own
        assert tree.years[0].count == 0
        assert tree.years[0].children[0].tag_name == "2024-02"

    def test_unknown_tag_types_are_ignored(self):
        tree = build_timeline_tree([
            TagCount("2024-02-01", "favourite", 2),
            date_tag("2024-02-01", 1),
            date_tag("2024-02", 1),
        ])
        assert tree.years[0].children[0].children[0].count == 1

    def test_year_without_dates_is_emitted_only_with_count(self):
        tree = build_timeline_tree([date_tag("2022", 4), date_tag("2021", 0)])
        assert [year.tag_name for year in tree.years] == ["2022"]
        assert tree.years[0].children == []

    def test_month_without_days_is_not_emitted(self):
        tree = build_timeline_tree([date_tag("2023", 1), date_tag("2023-05", 1)])
        assert tree.years[0].children == []

    def test_missing_month_tag_counts_as_zero(self):
        tree = build_timeline_tree([date_tag("2023-07-04", 3)])
        year = tree.years[0]
        assert year.count == 0
        assert year.children[0].count == 0
        assert year.children[0].children[0].count == 3

    def test_unparseable_tags_are_dropped(self):
        tree = build_timeline_tree([date_tag("someday", 9), date_tag("2020-ab-01", 1)])
        assert tree.years == []

    def test_years_newest_first(self):
        tree = build_timeline_tree([
            date_tag("2021", 1),
            date_tag("2024", 1),
            date_tag("2022", 1),
        ])
        assert [year.tag_name for year in tree.years] == ["2024", "2022", "2021"]

    def test_months_and_days_are_numerically_ordered(self):
        tree = build_timeline_tree([
            date_tag("2024-02-03", 1),
            date_tag("2024-11-20", 1),
            date_tag("2024-02-28", 1),
            date_tag("2024-02-10", 1),
            date_tag("2024-11", 1),
            date_tag("2024-02", 3),
        ])
        months = tree.years[0].children
        assert [month.label for month in months] == ["11", "02"]
        assert [day.label for day in months[1].children] == ["28", "10", "03"]

    def test_empty_input(self):
        assert build_timeline_tree([]).years == []

    def test_node_ids_are_unique(self):
        tree = build_timeline_tree([
            date_tag("2024-01-01", 1),
            date_tag("2024-01-02", 1),
            date_tag("2023-01-01", 1),
        ])
        ids = []
        for year in tree.years:
            ids.append(year.id)
            for month in year.children:
                ids.append(month.id)
                ids.extend(day.id for day in month.children)
        assert len(ids) == len(set(ids))

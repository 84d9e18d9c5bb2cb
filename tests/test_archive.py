"""Tests for index ordering and rendering."""

import datetime

import pytest

from archive import date_to_english, render_index, sort_articles, write_index
from front_matter import DocumentMetadata
from index_config import IndexConfig, TagDefinition


def article(name, date=None, tags=("tech",), title=None):
    return DocumentMetadata(
        title=name.capitalize() if title is None else title,
        tags=tuple(tags),
        publish_date=date,
        output_file_name=f"{name}.html",
    )


TECH = IndexConfig(title="Blog", tags=(TagDefinition("tech", "desc"),))


class TestDateToEnglish:
    @pytest.mark.parametrize(
        "day, expected",
        [
            (1, "May 1st, 2024"),
            (2, "May 2nd, 2024"),
            (3, "May 3rd, 2024"),
            (4, "May 4th, 2024"),
            (20, "May 20th, 2024"),
            (21, "May 21st, 2024"),
            (31, "May 31st, 2024"),
        ],
    )
    def test_suffixes(self, day, expected):
        assert date_to_english(datetime.date(2024, 5, day)) == expected

    @pytest.mark.parametrize("day, expected", [(11, "11st"), (12, "12nd"), (13, "13rd")])
    def test_teens_use_last_digit_rule(self, day, expected):
        # Known wrong English ("11th" is correct); kept so existing pages don't change.
        assert date_to_english(datetime.date(2024, 1, day)) == f"January {expected}, 2024"

    def test_all_months(self):
        names = [date_to_english(datetime.date(2000, month, 5)).split()[0] for month in range(1, 13)]
        assert names[0] == "January"
        assert names[-1] == "December"
        assert len(set(names)) == 12


class TestSortArticles:
    def test_newest_first(self):
        old = article("old", datetime.date(2023, 12, 31))
        new = article("new", datetime.date(2024, 1, 1))
        mid = article("mid", datetime.date(2023, 12, 30))
        assert sort_articles([mid, old, new]) == [new, old, mid]

    def test_month_and_day_break_ties(self):
        a = article("a", datetime.date(2024, 2, 1))
        b = article("b", datetime.date(2024, 1, 31))
        c = article("c", datetime.date(2024, 2, 2))
        assert sort_articles([a, b, c]) == [c, a, b]

    def test_undated_last(self):
        undated = article("undated")
        dated = article("dated", datetime.date(1999, 1, 1))
        assert sort_articles([undated, dated]) == [dated, undated]

    def test_stable_for_equal_dates(self):
        day = datetime.date(2024, 5, 1)
        first, second = article("first", day), article("second", day)
        assert sort_articles([first, second]) == [first, second]
        assert sort_articles([second, first]) == [second, first]

    def test_stable_for_undated(self):
        x, y, z = article("x"), article("y"), article("z", datetime.date(2020, 1, 1))
        assert sort_articles([x, y, z]) == [z, x, y]
        assert sort_articles([y, x, z]) == [z, y, x]

    def test_returns_new_list(self):
        articles = [article("a"), article("b", datetime.date(2024, 1, 1))]
        sort_articles(articles)
        assert articles[0].output_file_name == "a.html"


class TestRenderIndex:
    def test_end_to_end_example(self):
        articles = sort_articles([
            article("second", datetime.date(2024, 1, 15)),
            article("third"),
            article("first", datetime.date(2024, 3, 1)),
        ])
        assert render_index(articles, TECH) == (
            "# <center> Blog </center>\n"
            "## tech\n"
            "desc\n"
            "- [First](first.html)<br>March 1st, 2024\n"
            "- [Second](second.html)<br>January 15th, 2024\n"
            "- [Third](third.html)\n"
        )

    def test_default_config_is_heading_only(self):
        assert render_index([article("a")], IndexConfig()) == "# <center>  </center>\n"

    def test_sections_follow_declared_order(self):
        config = IndexConfig(tags=(TagDefinition("life", "L"), TagDefinition("tech", "T")))
        text = render_index([article("a", tags=("tech", "life"))], config)
        assert text == (
            "# <center>  </center>\n"
            "## life\nL\n- [A](a.html)\n"
            "## tech\nT\n- [A](a.html)\n"
        )

    def test_undeclared_tags_are_dropped(self):
        text = render_index([article("a", tags=("misc",))], TECH)
        assert "a.html" not in text
        assert "misc" not in text

    def test_empty_section_keeps_heading(self):
        config = IndexConfig(tags=(TagDefinition("tech", "desc"), TagDefinition("empty", "nothing yet")))
        text = render_index([article("a")], config)
        assert text.endswith("## empty\nnothing yet\n")

    @pytest.mark.parametrize("title", [None, ""])
    def test_untitled_articles_are_skipped(self, title):
        untitled = DocumentMetadata(title=title, tags=("tech",), output_file_name="untitled.html")
        text = render_index([untitled, article("titled")], TECH)
        assert "untitled.html" not in text
        assert "- [Titled](titled.html)\n" in text

    def test_duplicate_tags_list_once_per_section(self):
        text = render_index([article("a", tags=("tech", "tech"))], TECH)
        assert text.count("a.html") == 1

    def test_each_article_in_exactly_its_sections(self):
        config = IndexConfig(tags=(TagDefinition("a", ""), TagDefinition("b", ""), TagDefinition("c", "")))
        articles = [article("one", tags=("a", "c")), article("two", tags=("b", "z"))]
        sections = render_index(articles, config).split("## ")[1:]
        listed = {section.split("\n", 1)[0]: section for section in sections}
        assert "one.html" in listed["a"] and "two.html" not in listed["a"]
        assert "two.html" in listed["b"] and "one.html" not in listed["b"]
        assert "one.html" in listed["c"] and "two.html" not in listed["c"]

    def test_title_and_description_are_verbatim(self):
        config = IndexConfig(title="*My* <b>site</b>", tags=(TagDefinition("tech", "See [docs](d.html)"),))
        text = render_index([], config)
        assert text == "# <center> *My* <b>site</b> </center>\n## tech\nSee [docs](d.html)\n"


def test_write_index(tmp_path):
    path = write_index("# hi\n", tmp_path)
    assert path == tmp_path / "index.md"
    assert path.read_text(encoding="utf-8") == "# hi\n"

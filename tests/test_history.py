"""Tests for CommitHistory - load, filter, append and layout memoization."""

import pytest

import commitgraph.graph.history as history_module
from commitgraph.graph.history import CommitHistory
from commitgraph.graph.layout import compute_layout
from commitgraph.graph.types import Commit

PAGE_1 = [
    Commit("aaa111", ("bbb222",), message="Fix login redirect", author="Ana", refs=("main",)),
    Commit("bbb222", ("ccc333", "ddd444"), message="Merge branch 'feature'", author="Ben"),
    Commit("ddd444", ("ccc333",), message="Add sidebar", author="Ana", refs=("origin/feature",)),
]
PAGE_2 = [
    Commit("ccc333", ("eee555",), message="Fix typo in README", author="Cy"),
    Commit("eee555", (), message="Initial commit", author="Cy", refs=("v0.1",)),
]


@pytest.fixture
def layout_calls(monkeypatch):
    """Count calls to compute_layout made by the history model."""
    calls = []

    def counting_layout(commits, palette):
        calls.append(len(commits))
        return compute_layout(commits, palette)

    monkeypatch.setattr(history_module, "compute_layout", counting_layout)
    return calls


class TestLoading:
    def test_starts_empty(self):
        history = CommitHistory()
        assert history.commits == []
        assert history.rows == []
        assert history.max_columns == 1
        assert not history.has_more

    def test_load_replaces_list(self):
        history = CommitHistory()
        history.load_commits(PAGE_2)
        history.load_commits(PAGE_1, has_more=True)

        assert history.commits == PAGE_1
        assert history.has_more

    def test_append_adds_older_page(self):
        history = CommitHistory()
        history.load_commits(PAGE_1, has_more=True)
        history.load_commits(PAGE_2, append=True, has_more=False)

        assert history.all_commits == PAGE_1 + PAGE_2
        assert history.rows == compute_layout(PAGE_1 + PAGE_2)
        assert not history.has_more

    def test_append_keeps_earlier_rows(self):
        history = CommitHistory()
        history.load_commits(PAGE_1)
        before = list(history.rows)
        history.load_commits(PAGE_2, append=True)

        assert history.rows[: len(before)] == before

    def test_row_for(self):
        history = CommitHistory()
        history.load_commits(PAGE_1)

        assert history.row_for("ddd444") == 2
        assert history.row_for("eee555") is None

    def test_max_columns(self):
        history = CommitHistory()
        history.load_commits(PAGE_1 + PAGE_2)
        assert history.max_columns == 2

    def test_palette_used_for_rows(self):
        history = CommitHistory(["#123456"])
        history.load_commits(PAGE_1)
        assert {row.color for row in history.rows} == {"#123456"}


class TestMemoization:
    """Layout is only recomputed when the visible list changes"""

    def test_repeated_access_is_cached(self, layout_calls):
        history = CommitHistory()
        history.load_commits(PAGE_1)

        first = history.rows
        second = history.rows
        assert first is second
        assert layout_calls == [3]

    def test_new_page_recomputes_whole_list(self, layout_calls):
        history = CommitHistory()
        history.load_commits(PAGE_1)
        _ = history.rows
        history.load_commits(PAGE_2, append=True)
        _ = history.rows

        assert layout_calls == [3, 5]

    def test_same_filter_text_does_not_recompute(self, layout_calls):
        history = CommitHistory()
        history.load_commits(PAGE_1 + PAGE_2)
        history.set_filter("fix")
        _ = history.rows
        history.set_filter("  fix ")
        _ = history.rows

        assert layout_calls == [2]


class TestFilter:
    def test_filters_by_message_case_insensitive(self):
        history = CommitHistory()
        history.load_commits(PAGE_1 + PAGE_2)
        history.set_filter("FIX")

        assert [c.hash for c in history.commits] == ["aaa111", "ccc333"]
        assert len(history.rows) == 2
        assert len(history.all_commits) == 5

    def test_filters_by_author_ref_and_hash(self):
        history = CommitHistory()
        history.load_commits(PAGE_1 + PAGE_2)

        history.set_filter("ben")
        assert [c.hash for c in history.commits] == ["bbb222"]
        history.set_filter("v0.1")
        assert [c.hash for c in history.commits] == ["eee555"]
        history.set_filter("ddd4")
        assert [c.hash for c in history.commits] == ["ddd444"]

    def test_filtered_rows_are_a_fresh_layout(self):
        history = CommitHistory()
        history.load_commits(PAGE_1 + PAGE_2)
        history.set_filter("fix")

        assert history.rows == compute_layout(history.commits)

    def test_clearing_filter_shows_everything(self):
        history = CommitHistory()
        history.load_commits(PAGE_1 + PAGE_2)
        history.set_filter("fix")
        history.set_filter("")

        assert history.commits == PAGE_1 + PAGE_2
        assert history.row_for("eee555") == 4

    def test_filter_applies_to_appended_page(self):
        history = CommitHistory()
        history.load_commits(PAGE_1)
        history.set_filter("fix")
        history.load_commits(PAGE_2, append=True)

        assert [c.hash for c in history.commits] == ["aaa111", "ccc333"]


class TestUnpushed:
    """Unpushed detection with abbreviated hashes"""

    def test_exact_and_prefix_matches(self):
        history = CommitHistory()
        history.load_commits(PAGE_1, unpushed_hashes=["aaa111", "bbb"])

        assert history.is_unpushed("aaa111")
        assert history.is_unpushed("aaa")  # shorter than the unpushed hash
        assert history.is_unpushed("bbb222")  # longer than the unpushed hash
        assert not history.is_unpushed("ddd444")

    def test_empty_values_never_match(self):
        history = CommitHistory()
        history.load_commits(PAGE_1, unpushed_hashes=["", "aaa111"])

        assert not history.is_unpushed("")
        assert not history.is_unpushed("ccc333")

    def test_each_load_replaces_unpushed_set(self):
        history = CommitHistory()
        history.load_commits(PAGE_1, unpushed_hashes=["aaa111"])
        history.load_commits(PAGE_2, append=True)

        assert not history.is_unpushed("aaa111")


class TestBranchFilter:
    """Branch filter shows the commits reachable from one ref"""

    def test_hides_sibling_branch(self):
        history = CommitHistory()
        history.load_commits(PAGE_1 + PAGE_2)
        history.set_branch_filter("origin/feature")

        assert [c.hash for c in history.commits] == ["ddd444", "ccc333", "eee555"]
        assert history.row_for("aaa111") is None
        assert len(history.all_commits) == 5

    def test_filtered_rows_are_a_fresh_layout(self, layout_calls):
        history = CommitHistory()
        history.load_commits(PAGE_1 + PAGE_2)
        _ = history.rows
        history.set_branch_filter("origin/feature")

        assert history.rows == compute_layout(history.commits)
        assert layout_calls == [5, 3]

    def test_main_reaches_merged_branch(self):
        history = CommitHistory()
        history.load_commits(PAGE_1 + PAGE_2)
        history.set_branch_filter("main")

        assert history.commits == PAGE_1 + PAGE_2

    def test_none_restores_everything(self):
        history = CommitHistory()
        history.load_commits(PAGE_1 + PAGE_2)
        history.set_branch_filter("v0.1")
        assert [c.hash for c in history.commits] == ["eee555"]

        history.set_branch_filter(None)
        assert history.commits == PAGE_1 + PAGE_2
        assert history.branch_filter is None

    def test_clears_text_filter(self):
        history = CommitHistory()
        history.load_commits(PAGE_1 + PAGE_2)
        history.set_filter("fix")
        history.set_branch_filter("origin/feature")

        assert history.filter_text == ""
        assert [c.hash for c in history.commits] == ["ddd444", "ccc333", "eee555"]

    def test_text_filter_narrows_branch(self):
        history = CommitHistory()
        history.load_commits(PAGE_1 + PAGE_2)
        history.set_branch_filter("origin/feature")
        history.set_filter("fix")

        assert [c.hash for c in history.commits] == ["ccc333"]

    def test_unknown_ref_shows_nothing(self):
        history = CommitHistory()
        history.load_commits(PAGE_1 + PAGE_2)
        history.set_branch_filter("nope")

        assert history.commits == []
        assert history.rows == []

    def test_applies_to_appended_page(self):
        history = CommitHistory()
        history.load_commits(PAGE_1, has_more=True)
        history.set_branch_filter("origin/feature")
        history.load_commits(PAGE_2, append=True)

        assert [c.hash for c in history.commits] == ["ddd444", "ccc333", "eee555"]

    def test_head_decoration_names_the_branch(self):
        history = CommitHistory()
        history.load_commits([Commit("b", ("a",), refs=("HEAD -> dev",)), Commit("a", ())])
        history.set_branch_filter("dev")

        assert [c.hash for c in history.commits] == ["b", "a"]
        assert history.available_refs() == ["HEAD", "dev"]

    def test_available_refs_in_history_order(self):
        history = CommitHistory()
        history.load_commits(PAGE_1 + PAGE_2)

        assert history.available_refs() == ["main", "origin/feature", "v0.1"]


class TestFindByPrefix:
    def test_finds_visible_commit(self):
        history = CommitHistory()
        history.load_commits(PAGE_1 + PAGE_2)

        assert history.find_by_prefix("CCC3") == "ccc333"
        assert history.find_by_prefix("") is None
        assert history.find_by_prefix("fff") is None

    def test_ignores_hidden_commits(self):
        history = CommitHistory()
        history.load_commits(PAGE_1 + PAGE_2)
        history.set_branch_filter("origin/feature")

        assert history.find_by_prefix("aaa") is None

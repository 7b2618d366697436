from __future__ import annotations

import itertools

import pytest
from fakes import make_repo

from readme_stats.domain.entities import Contributor, Issue
from readme_stats.services.aggregation import (
    compute_totals,
    count_open_issues,
    filter_owned,
    fold_contributors,
    language_shares,
    merge_contributors,
    merge_languages,
    most_recent,
    rank_contributors,
    top_starred,
)


class TestFilterOwned:
    def test_drops_forks_and_foreign_owners(self) -> None:
        repos = [
            make_repo("a"),
            make_repo("b", fork=True),
            make_repo("c", owner="someone-else"),
            make_repo("d"),
        ]
        assert [r.name for r in filter_owned(repos, "octocat")] == ["a", "d"]

    def test_owner_match_is_case_insensitive(self) -> None:
        assert len(filter_owned([make_repo("a", owner="OctoCat")], "octocat")) == 1

    def test_removes_duplicates_keeping_first(self) -> None:
        first = make_repo("a", stars=1)
        dupe = make_repo("a", stars=99)
        result = filter_owned([first, make_repo("b"), dupe], "octocat")
        assert result == [first, make_repo("b")]


def test_compute_totals() -> None:
    repos = [make_repo("a", stars=10, forks=2), make_repo("b", stars=5, forks=1)]
    assert compute_totals(repos) == (15, 3)
    assert compute_totals([]) == (0, 0)


class TestRecency:
    def test_sorts_by_push_time_regardless_of_input_order(self) -> None:
        repos = [
            make_repo("old", pushed="2020-01-01"),
            make_repo("new", pushed="2024-06-01"),
            make_repo("mid", pushed="2022-03-01"),
        ]
        assert [r.name for r in most_recent(repos, limit=2)] == ["new", "mid"]

    def test_never_pushed_sorts_last(self) -> None:
        repos = [make_repo("empty", pushed=None), make_repo("a", pushed="2021-01-01")]
        assert [r.name for r in most_recent(repos)] == ["a", "empty"]


def test_top_starred_ties_keep_listing_order() -> None:
    repos = [
        make_repo("a", stars=3),
        make_repo("b", stars=7),
        make_repo("c", stars=3),
        make_repo("d", stars=1),
    ]
    assert [r.name for r in top_starred(repos, limit=3)] == ["b", "a", "c"]


class TestLanguages:
    def test_merge_is_additive(self) -> None:
        merged = merge_languages([{"Python": 100, "Go": 50}, {"Go": 25, "Rust": 5}])
        assert merged == {"Python": 100, "Go": 75, "Rust": 5}

    def test_percentages_sum_to_100_with_few_languages(self) -> None:
        shares = language_shares({"Python": 300, "Go": 100, "Shell": 100})
        assert [s.language for s in shares] == ["Python", "Go", "Shell"]
        assert shares[0].percentage == pytest.approx(60.0)
        assert sum(s.percentage for s in shares) == pytest.approx(100.0)

    def test_truncation_keeps_sum_at_most_100(self) -> None:
        histogram = {f"lang{i}": i + 1 for i in range(15)}
        shares = language_shares(histogram, limit=10)
        assert len(shares) == 10
        assert sum(s.percentage for s in shares) <= 100.0
        assert shares[0].language == "lang14"

    def test_ties_keep_first_occurrence(self) -> None:
        shares = language_shares({"C": 10, "A": 10, "B": 20})
        assert [s.language for s in shares] == ["B", "C", "A"]

    def test_empty_histogram(self) -> None:
        assert language_shares({}) == []

    def test_zero_byte_total_does_not_divide_by_zero(self) -> None:
        shares = language_shares({"Python": 0})
        assert shares[0].percentage == 0.0


class TestIssues:
    def test_pull_requests_are_excluded(self) -> None:
        issues = [
            Issue(1),
            Issue(2, is_pull_request=True),
            Issue(3),
            Issue(4),
        ]
        assert count_open_issues(issues) == 3

    def test_count_is_order_independent(self) -> None:
        issues = [Issue(1, is_pull_request=True), Issue(2), Issue(3, is_pull_request=True)]
        for perm in itertools.permutations(issues):
            assert count_open_issues(perm) == 1


class TestContributors:
    def test_fold_accumulates_case_insensitively_and_first_seen_wins(self) -> None:
        merged: dict[str, Contributor] = {}
        fold_contributors(merged, [Contributor("Alice", "https://a/1", "av1", 5)])
        fold_contributors(merged, [Contributor("alice", "https://a/2", "av2", 3)])
        assert merged == {"alice": Contributor("Alice", "https://a/1", "av1", 8)}

    def test_counts_never_decrease(self) -> None:
        merged: dict[str, Contributor] = {}
        previous = 0
        for batch in ([Contributor("bob", contributions=2)], [Contributor("bob")],
                      [Contributor("BOB", contributions=4)]):
            fold_contributors(merged, batch)
            assert merged["bob"].contributions >= previous
            previous = merged["bob"].contributions
        assert previous == 6

    def test_skips_entries_without_login(self) -> None:
        merged = fold_contributors({}, [Contributor("", contributions=10)])
        assert merged == {}

    def test_merge_is_commutative(self) -> None:
        repo_a = [Contributor("ann", contributions=10), Contributor("ben", contributions=1)]
        repo_b = [Contributor("cat", contributions=7), Contributor("ann", contributions=2)]
        repo_c = [Contributor("ben", contributions=20)]
        expected = [("ben", 21), ("ann", 12), ("cat", 7)]
        for order in itertools.permutations([repo_a, repo_b, repo_c]):
            ranked = merge_contributors(list(order))
            assert [(c.login, c.contributions) for c in ranked] == expected

    def test_ranking_truncates_to_limit(self) -> None:
        contributors = [Contributor(f"user{i}", contributions=i) for i in range(15)]
        ranked = merge_contributors([contributors], limit=10)
        assert len(ranked) == 10
        assert ranked[0].login == "user14"
        assert ranked[-1].login == "user5"

    def test_ties_keep_first_seen_order_and_spelling(self) -> None:
        repo_a = [Contributor("zed", contributions=3), Contributor("Amy", "https://a", "av", 1)]
        repo_b = [Contributor("amy", "https://b", "bv", 2), Contributor("bob", contributions=5)]

        merged: dict[str, Contributor] = {}
        fold_contributors(merged, repo_a)
        fold_contributors(merged, repo_b)

        assert merged["amy"] == Contributor("Amy", "https://a", "av", 3)
        ranked = rank_contributors(merged)
        assert [(c.login, c.contributions) for c in ranked] == [
            ("bob", 5),
            ("zed", 3),
            ("Amy", 3),
        ]

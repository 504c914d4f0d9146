from __future__ import annotations

import pytest

from src.project_tracker.project_tracker.core.enums import HealthScore, SortOrder, Trend
from src.project_tracker.project_tracker.dashboard.stats import (
    MemberStats,
    SortState,
    build_member_stats,
    completion_rate,
    department_stats,
    division_stats,
    health_score,
    needs_attention,
    percent,
    project_status_summary,
    rollup,
    sort_rows,
    team_count,
    top_by,
    trend_for,
)
from src.project_tracker.project_tracker.projects.model import Project
from src.project_tracker.project_tracker.users.model import User


def _user(uid, role="Team Member", department="Backend", **extra):
    return User.from_record({"id": uid, "username": f"u{uid}", "password": "x", "role": role,
                             "name": f"User {uid}", "department": department, **extra})


def _project(pid, status, members=None):
    record = {"id": pid, "name": pid, "type": "main", "priority": "Low", "status": status}
    if members is not None:
        record["teamMembers"] = members
    return Project.from_record(record)


def test_single_live_project_scenario():
    users = [_user("1")]
    projects = [_project("p1", "LIVE", ["1"])]

    [row] = build_member_stats(users, projects)

    assert row.to_dict() == {"id": "1", "name": "User 1", "projectCount": 1, "ongoing": 0,
                             "onHold": 0, "done": 0, "uat": 0, "live": 1}
    [backend] = department_stats(users, projects)
    assert backend.key == "Backend"
    assert backend.health == HealthScore.EXCELLENT


def test_untracked_statuses_only_count_towards_total():
    users = [_user("1")]
    statuses = ["Ongoing", "On Hold", "DONE", "UAT", "LIVE", "Cancelled", "In Development", "Re Development"]
    projects = [_project(f"p{i}", s, ["1"]) for i, s in enumerate(statuses)]

    [row] = build_member_stats(users, projects)

    buckets = row.ongoing + row.on_hold + row.done + row.uat + row.live
    assert row.project_count == 8
    assert buckets == 5


def test_bucket_sum_equals_total_when_all_statuses_tracked():
    users = [_user("1")]
    projects = [_project("a", "DONE", ["1"]), _project("b", "UAT", ["1"])]

    [row] = build_member_stats(users, projects)

    assert row.ongoing + row.on_hold + row.done + row.uat + row.live == row.project_count


@pytest.mark.parametrize(
    "status,field",
    [("Ongoing", "ongoing"), ("On Hold", "onHold"), ("DONE", "done"), ("UAT", "uat"), ("LIVE", "live")],
)
def test_each_tracked_status_has_its_own_bucket(status, field):
    [row] = build_member_stats([_user("1")], [_project("p", status, ["1"])])

    counts = {k: v for k, v in row.to_dict().items() if k not in ("id", "name", "projectCount")}
    assert counts == {"ongoing": 0, "onHold": 0, "done": 0, "uat": 0, "live": 0, field: 1}


def test_project_status_summary_counts_shared_project_once():
    users = [_user("1"), _user("2")]
    projects = [_project("shared", "Ongoing", ["1", "2"]), _project("orphan", "LIVE"), _project("x", "Cancelled", [])]

    assert rollup(build_member_stats(users, projects)).ongoing == 2
    assert project_status_summary(projects) == {"projectCount": 3, "ongoing": 1, "onHold": 0, "done": 0,
                                                "uat": 0, "live": 1}


def test_team_count_treats_missing_leader_as_one_team():
    users = [_user("1", teamLeaderId="a"), _user("2", teamLeaderId="a"), _user("3"), _user("4"),
             _user("5", role="Team Leader")]

    assert team_count(users) == 2


def test_membership_tolerates_missing_team_members_and_dangling_ids():
    users = [_user("1"), _user("9", role="Team Leader")]
    projects = [_project("p1", "DONE"), _project("p2", "DONE", ["ghost", "1"])]

    rows = build_member_stats(users, projects)

    assert [r.member_id for r in rows] == ["1"]
    assert rows[0].project_count == 1


def test_completion_rate_is_zero_not_nan_for_empty_member():
    [row] = build_member_stats([_user("1")], [])

    assert row.completion_rate == 0
    assert completion_rate(0, 0) == 0
    assert percent(0, 0) == 0
    assert needs_attention(row)


def test_percent_rounds_half_up():
    assert percent(1, 8) == 13  # 12.5
    assert percent(1, 3) == 33
    assert percent(2, 3) == 67


@pytest.mark.parametrize(
    "ongoing,uat,live,expected",
    [
        (0, 0, 0, HealthScore.NEEDS_FOCUS),
        (0, 0, 1, HealthScore.EXCELLENT),
        (1, 0, 1, HealthScore.GOOD),  # 0.5 is not > 0.5
        (2, 0, 1, HealthScore.GOOD),
        (4, 5, 1, HealthScore.FAIR),
        (6, 3, 1, HealthScore.NEEDS_FOCUS),
    ],
)
def test_health_score_tiers(ongoing, uat, live, expected):
    assert health_score(ongoing, uat, live) == expected


def test_trend_thresholds():
    assert trend_for(50) == Trend.UP
    assert trend_for(49) == Trend.FLAT
    assert trend_for(30) == Trend.FLAT
    assert trend_for(29) == Trend.DOWN


def test_rollup_sums_fields():
    total = rollup([MemberStats("a", project_count=2, done=1, live=1), MemberStats("b", project_count=3, on_hold=3)])

    assert total.name == "Total"
    assert (total.project_count, total.done, total.live, total.on_hold) == (5, 1, 1, 3)


def test_rollup_of_nothing_is_zero():
    assert rollup([]).project_count == 0


def test_department_team_count_counts_distinct_leaders():
    users = [
        _user("1", teamLeaderId="10"),
        _user("2", teamLeaderId="10"),
        _user("3", teamLeaderId="11"),
        _user("4"),
        _user("5", department="QA"),
    ]

    backend, qa = department_stats(users, [])

    assert backend.teams == 3  # "10", "11" and no leader
    assert qa.teams == 1
    assert len(backend.members) == 4


def test_division_groups_come_from_group_heads():
    users = [
        _user("g1", role="Group Head", department="Backend", division="Tech"),
        _user("g2", role="Group Head", department="Sales"),
        _user("l1", role="Team Leader", department="Backend", division="Tech"),
        _user("l2", role="Team Leader", department="Sales"),
        _user("l3", role="Team Leader", department="Backend"),
    ]
    projects = [_project("p1", "LIVE", ["l1"]), _project("p2", "Ongoing", ["l3"])]

    tech, sales = division_stats(users, projects)

    assert tech.key == "Tech"
    assert [m.id for m in tech.members] == ["l1"]
    assert tech.projects.project_count == 1
    assert sales.key == "Sales"
    assert [m.id for m in sales.members] == ["l2"]
    assert sales.health == HealthScore.NEEDS_FOCUS


def test_top_by_empty_is_sentinel():
    pick = top_by([], lambda r: r, str)
    assert (pick.label, pick.value, pick.row) == ("", 0, None)


def test_top_by_strict_greater_keeps_earliest():
    rows = [("a", 0), ("b", 3), ("c", 3), ("d", 1)]
    pick = top_by(rows, lambda r: r[1], lambda r: r[0])

    assert (pick.label, pick.value) == ("b", 3)


def test_top_by_all_zero_keeps_sentinel():
    pick = top_by([("a", 0), ("b", 0)], lambda r: r[1], lambda r: r[0])
    assert pick.label == ""


def test_sort_rows_strings_and_numbers():
    rows = [{"name": "b", "n": 2}, {"name": "a", "n": 10}, {"name": "C", "n": 1}]

    assert [r["name"] for r in sort_rows(rows, "name")] == ["C", "a", "b"]
    assert [r["n"] for r in sort_rows(rows, "n", SortOrder.DESC)] == [10, 2, 1]


def test_sort_rows_reads_dataclass_fields_by_camel_case():
    rows = [MemberStats("a", on_hold=1), MemberStats("b", on_hold=5)]

    assert [r.name for r in sort_rows(rows, "onHold", SortOrder.DESC)] == ["b", "a"]


def test_sort_rows_mixed_and_missing_values_are_stable():
    rows = [{"k": 1, "i": 0}, {"i": 1}, {"k": "x", "i": 2}, {"k": 1, "i": 3}]

    out = sort_rows(rows, "k")

    assert sorted(r["i"] for r in out) == [0, 1, 2, 3]
    assert [r["i"] for r in sort_rows([{"i": 0}, {"i": 1}], "missing")] == [0, 1]


def test_sort_state_toggles_on_same_field():
    rows = [{"name": n, "i": i} for i, n in enumerate(["b", "a", "c", "a"])]
    state = SortState()

    state = state.toggle("name")
    assert state.order == SortOrder.DESC
    desc = state.apply(rows)

    state = state.toggle("name")
    assert state.order == SortOrder.ASC
    asc = state.apply(rows)

    assert len(desc) == len(asc) == len(rows)
    assert sorted(r["i"] for r in desc) == [0, 1, 2, 3]
    assert [r["name"] for r in asc] == ["a", "a", "b", "c"]
    # equal keys keep their original order in both directions
    assert [r["i"] for r in asc if r["name"] == "a"] == [1, 3]
    assert [r["i"] for r in desc if r["name"] == "a"] == [1, 3]


def test_sort_state_new_field_starts_ascending():
    state = SortState(field="name", order=SortOrder.DESC).toggle("live")
    assert state == SortState(field="live", order=SortOrder.ASC)

"""Tests for project visibility and feature gates."""

from nexus.domain.member import (
    can_create_project,
    can_edit_default_stages,
    can_manage_announcements,
    can_manage_teams,
    can_view_budget,
    can_view_project,
    can_view_team_tab,
    filter_visible_projects,
    sort_members_by_access,
    visible_members,
)
from nexus.domain.member.models import Member


def _portfolio(make_project, member):
    return [
        make_project("1", team="Team A"),
        make_project("2", team="Team B"),
        make_project("3", team="Team B", team_members=[member.id]),
        make_project("4"),
    ]


def test_admin_and_manager_see_everything(make_project, admin, manager, member):
    projects = _portfolio(make_project, member)
    assert len(filter_visible_projects(admin, projects)) == 4
    assert len(filter_visible_projects(manager, projects)) == 4


def test_member_sees_team_and_assigned_projects_only(make_project, member):
    visible = filter_visible_projects(member, _portfolio(make_project, member))
    assert [p.id for p in visible] == ["1", "3"]


def test_senior_member_is_filtered_like_a_member(make_project, senior, member):
    visible = filter_visible_projects(senior, _portfolio(make_project, member))
    assert [p.id for p in visible] == ["2", "3"]


def test_member_without_team_sees_only_assignments(make_project, loner):
    projects = [make_project("1", team="Team A"), make_project("2", team_members=[loner.id])]
    assert [p.id for p in filter_visible_projects(loner, projects)] == ["2"]


def test_project_without_team_is_not_matched_by_teamless_member(make_project, loner):
    assert not can_view_project(loner, make_project("9"))


def test_multi_team_membership(make_project):
    user = Member(id="u-x", email="x@studio.test", teams=["Team C", "Team D"])
    assert can_view_project(user, make_project("1", team="Team D"))
    assert not can_view_project(user, make_project("2", team="Team A"))


def test_query_matches_name_or_client(make_project, admin):
    projects = [
        make_project("1", name="Shop redesign", client_name="Acme"),
        make_project("2", name="Landing page", client_name="Shopify Partners"),
        make_project("3", name="Brand book", client_name="Globex"),
    ]
    assert [p.id for p in filter_visible_projects(admin, projects, "  shop ")] == ["1", "2"]


def test_no_user_sees_nothing(make_project):
    assert filter_visible_projects(None, [make_project()]) == []


def test_feature_gates(admin, manager, senior, member, make_project):
    assert can_create_project(senior)
    assert not can_create_project(member)
    assert can_manage_teams(admin)
    assert not can_manage_teams(manager)
    assert can_manage_announcements(manager)
    assert not can_manage_announcements(senior)
    assert can_view_team_tab(senior)
    assert not can_view_team_tab(member)
    assert can_edit_default_stages(manager)
    assert not can_edit_default_stages(senior)


def test_budget_visibility(member, senior, make_project):
    assert can_view_budget(senior)
    assert not can_view_budget(member, make_project())
    assert can_view_budget(member, make_project(budget_visible_to_members=True))


def test_visible_members_and_ordering(admin, manager, senior, member, loner):
    everyone = [loner, member, senior, manager, admin]

    assert [m.id for m in visible_members(member, everyone)] == ["u-member", "u-manager"]
    assert len(visible_members(admin, everyone)) == 5
    assert len(visible_members(loner, everyone)) == 5
    assert [m.id for m in sort_members_by_access(everyone)] == [
        "u-admin",
        "u-manager",
        "u-senior",
        "u-loner",
        "u-member",
    ]

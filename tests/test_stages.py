"""Tests for the stage / progress state machine."""

import pytest

from nexus.domain.project import (
    FALLBACK_STAGE,
    StageAdvanced,
    StageCompletionToggled,
    StageRegressed,
    click_stage,
    edit_stages,
    progress_for_index,
    recompute_progress,
    stage_invariants_hold,
)
from nexus.domain.shared import Err, Ok


def _click(project, stage):
    result = click_stage(project, stage)
    assert isinstance(result, Ok), result
    return result.value


class TestAdvance:
    def test_progress_from_index(self):
        assert progress_for_index(1, 3) == 67
        assert progress_for_index(0, 3) == 33
        assert progress_for_index(2, 3) == 100

    def test_advance_marks_earlier_stages_complete(self, make_project):
        project, event = _click(make_project(), "Build")

        assert project.current_stage == "Build"
        assert project.progress == 100
        assert project.completed_stages == ["Inquiry", "Design"]
        assert isinstance(event, StageAdvanced)
        assert event.from_stage == "Inquiry"
        assert event.to_stage == "Build"

    def test_advance_keeps_existing_marks_without_duplicates(self, make_project):
        project, _ = _click(make_project(completed_stages=["Inquiry"]), "Design")

        assert project.completed_stages == ["Inquiry"]
        assert project.progress == 67

    def test_input_is_not_mutated(self, make_project):
        original = make_project()
        _click(original, "Design")
        assert original.current_stage == "Inquiry"
        assert original.progress == 0


class TestRegress:
    def test_reclick_current_steps_back_by_five(self, make_project):
        project = make_project(current_stage="Design", completed_stages=["Inquiry", "Design"], progress=67)
        updated, event = _click(project, "Design")

        assert updated.current_stage == "Inquiry"
        assert updated.progress == 62
        assert "Design" not in updated.completed_stages
        assert isinstance(event, StageRegressed)

    def test_progress_floors_at_zero(self, make_project):
        project = make_project(current_stage="Design", progress=3)
        updated, _ = _click(project, "Design")
        assert updated.progress == 0

    def test_reclick_first_stage_is_a_noop(self, make_project):
        project = make_project(progress=33)
        updated, event = _click(project, "Inquiry")

        assert event is None
        assert updated == project


class TestToggle:
    def test_clicking_earlier_stage_toggles_completion(self, make_project):
        project = make_project(current_stage="Build", completed_stages=["Inquiry", "Design"], progress=100)

        updated, event = _click(project, "Inquiry")
        assert updated.completed_stages == ["Design"]
        assert updated.current_stage == "Build"
        assert updated.progress == 100
        assert isinstance(event, StageCompletionToggled)
        assert event.completed is False

        again, event = _click(updated, "Inquiry")
        assert set(again.completed_stages) == {"Inquiry", "Design"}
        assert event.completed is True


def test_unknown_stage_is_rejected(make_project):
    result = click_stage(make_project(), "Launch")
    assert isinstance(result, Err)
    assert "Launch" in result.error


@pytest.mark.parametrize(
    "clicks",
    [
        ["Build", "Inquiry", "Build", "Design"],
        ["Design", "Design", "Design", "Build", "Build"],
        ["Inquiry", "Build", "Design", "Inquiry"],
    ],
)
def test_invariants_hold_after_any_click_sequence(make_project, clicks):
    project = make_project()
    for stage in clicks:
        project, _ = _click(project, stage)
        assert stage_invariants_hold(project)


class TestEditStages:
    def test_pointer_kept_when_stage_survives(self, make_project):
        project = make_project(current_stage="Design", completed_stages=["Inquiry"], progress=67)
        updated, event = edit_stages(project, ["Inquiry", "Design", "QA", "Build"])

        assert updated.current_stage == "Design"
        assert updated.stages == ["Inquiry", "Design", "QA", "Build"]
        assert event.stages == updated.stages

    def test_pointer_reset_and_marks_pruned(self, make_project):
        project = make_project(current_stage="Design", completed_stages=["Inquiry", "Design"], progress=67)
        updated, _ = edit_stages(project, ["Kickoff", "Inquiry"])

        assert updated.current_stage == "Kickoff"
        assert updated.completed_stages == ["Inquiry"]
        assert stage_invariants_hold(updated)

    def test_progress_is_left_alone(self, make_project):
        project = make_project(current_stage="Design", progress=67)
        updated, _ = edit_stages(project, ["Only"])
        assert updated.progress == 67

    def test_blank_and_duplicate_names_dropped(self, make_project):
        updated, _ = edit_stages(make_project(), [" Inquiry ", "", "Inquiry", "Build"])
        assert updated.stages == ["Inquiry", "Build"]

    def test_empty_list_falls_back(self, make_project):
        updated, _ = edit_stages(make_project(), ["  "])
        assert updated.stages == [FALLBACK_STAGE]
        assert updated.current_stage == FALLBACK_STAGE


class TestRecomputeProgress:
    def test_last_stage_is_complete(self, make_project):
        assert recompute_progress(make_project(current_stage="Build")) == 100

    def test_share_of_completed(self, make_project):
        project = make_project(current_stage="Design", completed_stages=["Inquiry"])
        assert recompute_progress(project) == 33

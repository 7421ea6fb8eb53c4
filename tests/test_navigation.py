import pytest

from dynamic_form_engine.navigation import SectionNavigator


def test_indexes_are_clamped():
    navigator = SectionNavigator(3)
    assert navigator.next_index(0) == 1
    assert navigator.next_index(2) == 2
    assert navigator.previous_index(2) == 1
    assert navigator.previous_index(0) == 0


def test_terminal_and_progress():
    navigator = SectionNavigator(4)
    assert not navigator.is_terminal(2)
    assert navigator.is_terminal(3)

    progress = navigator.progress(1)
    assert progress.label == "Section 2 of 4"
    assert progress.percent == 50.0
    assert not progress.is_first_section
    assert not progress.is_last_section


def test_single_section_form_is_both_first_and_last():
    progress = SectionNavigator(1).progress(0)
    assert progress.is_first_section and progress.is_last_section
    assert progress.percent == 100.0


def test_rejects_empty_form():
    with pytest.raises(ValueError):
        SectionNavigator(0)

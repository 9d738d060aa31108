"""Tests for child profiles."""
import dataclasses

import pytest

from child import Child, create_child, parse_child_spec
from thresholds import AgeGroup


def test_create_child_assigns_id_and_band():
    child = create_child("Ava", 8)

    assert child.id.startswith("child-")
    assert len(child.id) == len("child-") + 12
    assert child.name == "Ava"
    assert child.age_group is AgeGroup.BABY


def test_child_ids_are_unique():
    assert create_child("A", 1).id != create_child("A", 1).id


def test_create_child_rejects_negative_age():
    with pytest.raises(ValueError):
        create_child("Ava", -1)


def test_with_updates_recomputes_band():
    child = create_child("Ava", 8)

    older = child.with_updates(age_months=30)

    assert older.age_group is AgeGroup.TODDLER
    assert older.id == child.id
    assert older.name == "Ava"
    # The original is untouched
    assert child.age_group is AgeGroup.BABY


def test_with_updates_name_only():
    child = Child(id="child-1", name="Ava", age_months=40)
    renamed = child.with_updates(name="Eva")
    assert renamed.name == "Eva"
    assert renamed.age_months == 40


def test_child_is_immutable():
    child = create_child("Ava", 8)
    with pytest.raises(dataclasses.FrozenInstanceError):
        child.age_months = 20


@pytest.mark.parametrize("spec,name,months", [
    ("Ava:8", "Ava", 8),
    (" Max : 48", "Max", 48),
    ("Mary Jane:70", "Mary Jane", 70),
])
def test_parse_child_spec(spec, name, months):
    child = parse_child_spec(spec)
    assert (child.name, child.age_months) == (name, months)


@pytest.mark.parametrize("spec", ["Ava", ":8", "Ava:eight", "Ava:-3"])
def test_parse_child_spec_rejects_bad_input(spec):
    with pytest.raises(ValueError):
        parse_child_spec(spec)

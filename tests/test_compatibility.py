"""Tests for the parent/type compatibility rule and invariant checks."""

import itertools

import pytest

from poi_atlas import (
    IncompatibleHierarchyError,
    MissingParentError,
    PoiForest,
    PoiNode,
    PoiType,
    find_invariant_violations,
    is_compatible,
    rank,
    require_compatible,
)


def one_of_each_type() -> PoiForest:
    """Forest with one root per type, ids 1..8 in rank order."""
    forest = PoiForest()
    for index, place in enumerate(PoiType, start=1):
        forest.insert(PoiNode(name=f"{place.value} {index}", place=place, poi_id=index))
    return forest


class TestIsCompatible:
    """Test the strict rank rule."""

    def test_no_parent_always_compatible(self):
        forest = one_of_each_type()
        for place in PoiType:
            assert is_compatible(forest, None, place) is True

    def test_region_parent(self):
        """Test region accepts area, rejects region and continent."""
        forest = one_of_each_type()
        region = 3
        assert forest.get(region).place is PoiType.REGION
        assert is_compatible(forest, region, PoiType.AREA) is True
        assert is_compatible(forest, region, PoiType.REGION) is False
        assert is_compatible(forest, region, PoiType.CONTINENT) is False

    def test_matches_rank_comparison_for_all_pairs(self):
        forest = one_of_each_type()
        for parent, place in itertools.product(forest.points, PoiType):
            expected = rank(place) > rank(forest.get(parent).place)
            assert is_compatible(forest, parent, place) is expected

    def test_point_accepts_no_children(self):
        forest = one_of_each_type()
        assert not any(is_compatible(forest, 8, place) for place in PoiType)

    def test_wire_string_type(self):
        forest = one_of_each_type()
        assert is_compatible(forest, 5, "neighborhood") is True

    def test_missing_parent_is_not_treated_as_root(self):
        forest = one_of_each_type()
        with pytest.raises(MissingParentError) as exc:
            is_compatible(forest, 42, PoiType.CITY)
        assert exc.value.poi_id == 42

    @pytest.mark.parametrize("place", [None, ""])
    def test_unset_type_is_indeterminate(self, place):
        forest = one_of_each_type()
        with pytest.raises(ValueError):
            is_compatible(forest, 1, place)
        with pytest.raises(ValueError):
            is_compatible(forest, None, place)


class TestRequireCompatible:
    """Test the raising guard."""

    def test_incompatible_raises(self):
        forest = one_of_each_type()
        with pytest.raises(IncompatibleHierarchyError) as exc:
            require_compatible(forest, 3, "region")
        assert exc.value.parent_place == "region"
        assert exc.value.place == "region"

    def test_compatible_passes(self):
        forest = one_of_each_type()
        require_compatible(forest, 3, "area")
        require_compatible(forest, None, "world")


class TestInvariantPreservation:
    """Validated inserts keep the forest sound."""

    def test_random_validated_inserts_keep_invariants(self):
        """Test every approved (parent, type) insert leaves no violations."""
        forest = PoiForest()
        forest.insert(PoiNode(name="World", place=PoiType.WORLD, poi_id=1))

        candidates = itertools.product([None, 1, 2, 3, 4, 5, 6], PoiType)
        for parent, place in candidates:
            if parent is not None and parent not in forest:
                continue
            if not is_compatible(forest, parent, place):
                continue
            forest.insert(PoiNode(name=f"{place.value}", place=place, poi_id=forest.next_id()), parent)
            assert find_invariant_violations(forest) == []

        assert len(forest) > 8

    def test_rejected_same_rank_never_inserted(self):
        """Test region under region is stopped before insert."""
        forest = PoiForest()
        forest.insert(PoiNode(name="Heartlands", place="region", poi_id=1))
        assert is_compatible(forest, 1, "region") is False
        assert forest.get(1).children == []


class TestFindInvariantViolations:
    """Test the diagnostic invariant checker on broken payloads."""

    def test_sound_forest(self):
        assert find_invariant_violations(one_of_each_type()) == []

    def test_unknown_root_and_child(self):
        forest = PoiForest.from_dict({
            "points": {"1": {"name": "W", "place": "world", "parent": None, "children": [7]}},
            "roots": [1, 9],
        })
        problems = find_invariant_violations(forest)
        assert "root 9 is not a known place" in problems
        assert "place 1 lists unknown child 7" in problems

    def test_orphan(self):
        forest = PoiForest.from_dict({
            "points": {"2": {"name": "C", "place": "city", "parent": 1, "children": []}},
            "roots": [],
        })
        assert find_invariant_violations(forest) == ["place 2 references missing parent 1"]

    def test_same_rank_child(self):
        forest = PoiForest.from_dict({
            "points": {
                "1": {"name": "A", "place": "region", "parent": None, "children": [2]},
                "2": {"name": "B", "place": "region", "parent": 1, "children": []},
            },
            "roots": [1],
        })
        problems = find_invariant_violations(forest)
        assert len(problems) == 1
        assert "not more specific" in problems[0]

    def test_cycle(self):
        forest = PoiForest.from_dict({
            "points": {
                "1": {"name": "A", "place": "city", "parent": 2, "children": [2]},
                "2": {"name": "B", "place": "camp", "parent": 1, "children": [1]},
            },
            "roots": [],
        })
        problems = find_invariant_violations(forest)
        assert any("cycle" in p for p in problems)

"""Tests for the creation-form option builders.

The core property: for any selected (parent, type) pair, the validator
and both builders agree on legality.
"""

import itertools

import pytest

from poi_atlas import (
    MissingParentError,
    PoiForest,
    PoiNode,
    PoiType,
    build_parent_options,
    build_type_options,
    is_compatible,
    parse_parent_id,
)
from poi_atlas.labels import get_translator


@pytest.fixture
def nested_forest():
    """World > Continent > Region > City > Neighborhood, and a lone camp root."""
    forest = PoiForest()
    chain = [
        ("Toril", PoiType.WORLD),
        ("Faerun", PoiType.CONTINENT),
        ("Cormyr", PoiType.REGION),
        ("Suzail", PoiType.CITY),
        ("Royal Gardens", PoiType.NEIGHBORHOOD),
    ]
    parent = None
    for poi_id, (name, place) in enumerate(chain, start=1):
        forest.insert(PoiNode(name=name, place=place, poi_id=poi_id), parent)
        parent = poi_id
    forest.insert(PoiNode(name="Bandit Camp", place=PoiType.CAMP, poi_id=6))
    return forest


class TestParentOptions:
    """Test build_parent_options()."""

    def test_no_parent_entry_first(self, nested_forest):
        options = build_parent_options(nested_forest, None)
        assert options[0].poi_id is None
        assert options[0].label == "No parent"
        assert options[0].disabled is False

    def test_one_entry_per_node_in_order(self, nested_forest):
        options = build_parent_options(nested_forest, None)
        assert [o.poi_id for o in options[1:]] == [1, 2, 3, 4, 5, 6]
        assert [o.label for o in options[1:3]] == ["Toril", "Faerun"]

    @pytest.mark.parametrize("selected", [None, ""])
    def test_unset_type_disables_nothing(self, nested_forest, selected):
        assert not any(o.disabled for o in build_parent_options(nested_forest, selected))

    def test_city_parent_disabled_for_region(self):
        """Test a city cannot parent a region; only "no parent" stays enabled."""
        forest = PoiForest()
        forest.insert(PoiNode(name="Waterdeep", place=PoiType.CITY, poi_id=1))

        options = build_parent_options(forest, PoiType.REGION)

        assert [(o.poi_id, o.disabled) for o in options] == [(None, False), (1, True)]

    def test_entries_in_ascending_id_order(self):
        """Test parents are listed by id whatever order the payload used."""
        forest = PoiForest.from_dict({
            "points": [
                {"id": 9, "name": "Ravenloft", "place": "world", "parent": None, "children": []},
                {"id": 2, "name": "Mystara", "place": "world", "parent": None, "children": []},
                {"id": 5, "name": "Krynn", "place": "world", "parent": None, "children": []},
            ],
            "roots": [9, 2, 5],
        })

        options = build_parent_options(forest, None)

        assert [o.poi_id for o in options] == [None, 2, 5, 9]
        assert [o.label for o in options[1:]] == ["Mystara", "Krynn", "Ravenloft"]

    def test_disabled_entries_stay_listed(self, nested_forest):
        options = build_parent_options(nested_forest, "world")
        assert len(options) == 7
        assert all(o.disabled for o in options[1:])


class TestTypeOptions:
    """Test build_type_options()."""

    def test_all_types_in_canonical_order(self, nested_forest):
        options = build_type_options(nested_forest, None)
        assert [o.place for o in options] == list(PoiType)
        assert not any(o.disabled for o in options)

    def test_world_parent_disables_only_world(self):
        """Test a world parent leaves continent through point enabled."""
        forest = PoiForest()
        forest.insert(PoiNode(name="Athas", place=PoiType.WORLD, poi_id=1))

        options = build_type_options(forest, 1)

        disabled = [o.place for o in options if o.disabled]
        assert disabled == [PoiType.WORLD]

    def test_region_parent(self, nested_forest):
        options = {o.place: o.disabled for o in build_type_options(nested_forest, 3)}
        assert options[PoiType.CONTINENT] is True
        assert options[PoiType.REGION] is True
        assert options[PoiType.AREA] is False

    def test_form_string_parent(self, nested_forest):
        """Test parent ids arriving as selector strings."""
        assert build_type_options(nested_forest, "3") == build_type_options(nested_forest, 3)
        assert not any(o.disabled for o in build_type_options(nested_forest, ""))

    def test_missing_parent_raises(self, nested_forest):
        with pytest.raises(MissingParentError):
            build_type_options(nested_forest, 99)

    def test_translated_labels(self, nested_forest):
        options = build_type_options(nested_forest, None, get_translator("it"))
        assert options[0].label == "Mondo"
        parents = build_parent_options(nested_forest, None, get_translator("it"))
        assert parents[0].label == "Nessun genitore"


class TestBuilderConsistency:
    """Validator and builders agree on every (parent, type) pair."""

    def test_all_pairs_agree(self, nested_forest):
        for parent, place in itertools.product([None] + list(nested_forest.points), PoiType):
            compatible = is_compatible(nested_forest, parent, place)

            parent_entry = next(o for o in build_parent_options(nested_forest, place) if o.poi_id == parent)
            type_entry = next(o for o in build_type_options(nested_forest, parent) if o.place is place)

            assert compatible is (not parent_entry.disabled), (parent, place)
            assert compatible is (not type_entry.disabled), (parent, place)

    def test_builders_do_not_modify_forest(self, nested_forest):
        before = nested_forest.to_dict()
        build_parent_options(nested_forest, "city")
        build_type_options(nested_forest, 2)
        assert nested_forest.to_dict() == before


class TestParseParentId:
    """Test selector value normalization."""

    @pytest.mark.parametrize("value,expected", [
        (None, None),
        ("", None),
        ("  ", None),
        ("12", 12),
        (7, 7),
    ])
    def test_values(self, value, expected):
        assert parse_parent_id(value) == expected

    def test_garbage_rejected(self):
        with pytest.raises(ValueError):
            parse_parent_id("capital")

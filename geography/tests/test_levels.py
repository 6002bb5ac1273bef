"""
Tests — Level computation: root level, descent, stale pruning, type
resolution, breadcrumbs and leaf code.

@file geography/tests/test_levels.py
"""

import pytest

from geography.hierarchy import (
    AreaNode,
    LevelType,
    LevelTypeStub,
    build_indices,
    build_selection_path,
    compute_levels,
    effective_selections,
    from_leaf,
    leaf_code,
)
from tests.factories import AreaNodeFactory, LevelTypeFactory


@pytest.fixture
def indices(area_nodes, level_types):
    return build_indices(area_nodes, level_types)


@pytest.fixture
def chain():
    """MA → MA-05 → MA-05-01"""
    types = [
        LevelType(id=1, code='100', name='Pays'),
        LevelType(id=2, code='200', name='Région'),
        LevelType(id=3, code='300', name='Ville'),
    ]
    nodes = [
        AreaNode(code='MA', name='Maroc', type_id=1),
        AreaNode(code='MA-05', name='Casablanca-Settat', type_id=2, parent_code='MA'),
        AreaNode(code='MA-05-01', name='Casablanca', type_id=3, parent_code='MA-05'),
    ]
    return build_indices(nodes, types), types


class TestComputeLevels:

    def test_empty_selection_gives_root_level_only(self, indices, level_types):
        levels = compute_levels(indices, [], level_types)
        assert len(levels) == 1
        assert [o.code for o in levels[0].options] == ['MA', 'TN']
        assert levels[0].selected_code == ''
        assert levels[0].type_name == 'Pays'

    def test_descends_through_valid_selections(self, indices, level_types):
        levels = compute_levels(indices, ['MA', 'MA-05'], level_types)
        assert [lvl.type_name for lvl in levels] == ['Pays', 'Région', 'Ville']
        assert [lvl.selected_code for lvl in levels] == ['MA', 'MA-05', '']
        assert [o.code for o in levels[2].options] == ['MA-05-01', 'MA-05-02']

    def test_stops_at_leaf(self, indices, level_types):
        levels = compute_levels(indices, ['MA', 'MA-05', 'MA-05-01', 'MA-05-01-A'], level_types)
        assert len(levels) == 4
        assert levels[-1].selected_code == 'MA-05-01-A'

    def test_depth_follows_data_not_rank(self, indices, level_types):
        # TN has one level less than MA.
        levels = compute_levels(indices, ['TN', 'TN-11'], level_types)
        assert len(levels) == 2
        assert levels[-1].selected_code == 'TN-11'

    def test_no_indices_gives_no_levels(self, level_types):
        assert compute_levels(None, ['MA'], level_types) == []

    def test_stale_selection_is_pruned(self, chain):
        indices, types = chain
        pruned = compute_levels(indices, ['MA', 'X-99'], types)
        expected = compute_levels(indices, ['MA'], types)
        assert pruned == expected
        assert [lvl.selected_code for lvl in pruned] == ['MA', '']

    def test_stale_selection_drops_deeper_levels(self, indices, level_types):
        levels = compute_levels(indices, ['MA', 'TN-11', 'MA-05-01'], level_types)
        assert len(levels) == 2
        assert effective_selections(levels) == ['MA']

    def test_stale_root_selection(self, indices, level_types):
        levels = compute_levels(indices, ['ZZ'], level_types)
        assert len(levels) == 1
        assert levels[0].selected_code == ''

    def test_type_from_embedded_stub_when_catalog_misses(self):
        nodes = [
            AreaNode(
                code='MA', name='Maroc', type_id=7,
                type_stub=LevelTypeStub(id=7, code='700', name='Pays'),
            ),
        ]
        levels = compute_levels(build_indices(nodes), [], [])
        assert (levels[0].type_id, levels[0].type_code, levels[0].type_name) == (7, '700', 'Pays')

    def test_type_placeholder_without_stub(self):
        nodes = [AreaNode(code='MA', name='Maroc', type_id=7)]
        levels = compute_levels(build_indices(nodes), [], None)
        assert levels[0].type_name == '7'

    def test_first_child_type_wins_on_mixed_siblings(self, level_types):
        nodes = [
            AreaNode(code='MA', name='Maroc', type_id=1),
            AreaNode(code='R1', name='Région 1', type_id=2, parent_code='MA', sort_order=1),
            AreaNode(code='V1', name='Ville 1', type_id=3, parent_code='MA', sort_order=2),
        ]
        with pytest.warns(UserWarning):
            indices = build_indices(nodes, level_types)
        levels = compute_levels(indices, ['MA'], level_types)
        assert levels[1].type_name == 'Région'
        assert [o.code for o in levels[1].options] == ['R1', 'V1']

    def test_deep_chain_is_iterative(self):
        depth = 3000
        nodes = [AreaNode(code='L0', name='L0', type_id=0)]
        nodes += [
            AreaNode(code=f'L{i}', name=f'L{i}', type_id=i, parent_code=f'L{i - 1}')
            for i in range(1, depth)
        ]
        indices = build_indices(nodes)
        selections = from_leaf(f'L{depth - 1}', indices)
        levels = compute_levels(indices, selections, None)
        assert len(levels) == depth
        assert leaf_code(build_selection_path(levels)) == f'L{depth - 1}'


class TestSelectionPath:

    def test_path_root_to_leaf(self, indices, level_types):
        levels = compute_levels(indices, ['MA', 'MA-05', 'MA-05-01'], level_types)
        path = build_selection_path(levels)
        assert [(s.type_name, s.area_code, s.area_name) for s in path] == [
            ('Pays', 'MA', 'Maroc'),
            ('Région', 'MA-05', 'Casablanca-Settat'),
            ('Ville', 'MA-05-01', 'Casablanca'),
        ]
        assert leaf_code(path) == 'MA-05-01'

    def test_empty_path(self, indices, level_types):
        levels = compute_levels(indices, [], level_types)
        assert build_selection_path(levels) == []
        assert leaf_code([]) == ''

    def test_round_trip_for_every_code(self, indices, level_types):
        for code in indices.by_code:
            levels = compute_levels(indices, from_leaf(code, indices), level_types)
            path = build_selection_path(levels)
            assert path[-1].area_code == code


class TestFactoryBuiltCatalog:

    def test_generated_catalog_names_levels(self):
        country, region = LevelTypeFactory(), LevelTypeFactory()
        nodes = [
            AreaNodeFactory(code='R', type_id=country.id),
            AreaNodeFactory(code='R-1', type_id=region.id, parent_code='R'),
        ]
        levels = compute_levels(build_indices(nodes, [country, region]), ['R'], [country, region])
        assert [lvl.type_name for lvl in levels] == [country.name, region.name]
        assert [lvl.type_code for lvl in levels] == [country.code, region.code]

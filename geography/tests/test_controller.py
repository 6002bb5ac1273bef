"""
Tests — SelectionController: cascade-clear, reset, restore from leaf,
phases, single-option auto-advance and index refresh.

@file geography/tests/test_controller.py
"""

import pytest

from geography.hierarchy import (
    NOT_FOUND,
    AreaNode,
    LevelType,
    SelectionController,
    SelectionPhase,
    build_indices,
)


@pytest.fixture
def controller(area_nodes, level_types):
    return SelectionController(build_indices(area_nodes, level_types), level_types)


@pytest.fixture
def single_chain():
    """One option per level: MA → MA-05 → MA-05-01, plus a two-way split below."""
    types = [
        LevelType(id=1, code='100', name='Pays'),
        LevelType(id=2, code='200', name='Région'),
        LevelType(id=3, code='300', name='Ville'),
        LevelType(id=4, code='400', name='Zone'),
    ]
    nodes = [
        AreaNode(code='MA', name='Maroc', type_id=1),
        AreaNode(code='MA-05', name='Casablanca-Settat', type_id=2, parent_code='MA'),
        AreaNode(code='MA-05-01', name='Casablanca', type_id=3, parent_code='MA-05'),
        AreaNode(code='Z1', name='Maarif', type_id=4, parent_code='MA-05-01'),
        AreaNode(code='Z2', name='Anfa', type_id=4, parent_code='MA-05-01'),
    ]
    return build_indices(nodes, types), types


class TestScenario:
    """MA → MA-05 → MA-05-01 walkthrough."""

    @pytest.fixture
    def chain_controller(self):
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
        return SelectionController(build_indices(nodes, types), types)

    def test_walkthrough(self, chain_controller):
        c = chain_controller
        assert [[o.code for o in lvl.options] for lvl in c.levels] == [['MA']]

        c.select(0, 'MA')
        assert len(c.levels) == 2
        assert [o.code for o in c.levels[1].options] == ['MA-05']

        # MA-05-01 is not a child of MA, so depth 1 is pruned.
        c.select(1, 'MA-05-01')
        assert c.leaf_code == 'MA'
        assert c.levels[1].selected_code == ''

        c.select(1, 'MA-05')
        c.select(2, 'MA-05-01')
        assert c.leaf_code == 'MA-05-01'
        assert c.phase == SelectionPhase.COMPLETE


class TestSelect:

    def test_select_appends(self, controller):
        controller.select(0, 'MA')
        controller.select(1, 'MA-05')
        assert controller.selections == ('MA', 'MA-05')
        assert controller.leaf_code == 'MA-05'

    def test_reselect_clears_deeper(self, controller):
        controller.select(0, 'MA')
        controller.select(1, 'MA-05')
        controller.select(2, 'MA-05-01')
        controller.select(1, 'MA-01')
        assert controller.selections == ('MA', 'MA-01')
        levels = controller.levels
        assert all(lvl.selected_code == '' for lvl in levels[2:])

    def test_same_value_still_clears_deeper(self, controller):
        controller.select(0, 'MA')
        controller.select(1, 'MA-05')
        controller.select(2, 'MA-05-01')
        controller.select(1, 'MA-05')
        assert controller.selections == ('MA', 'MA-05')

    @pytest.mark.parametrize('depth', [0, 1, 2, 3])
    def test_cascade_clear_at_every_depth(self, controller, depth):
        for i, code in enumerate(['MA', 'MA-05', 'MA-05-01', 'MA-05-01-A']):
            controller.select(i, code)
        controller.select(depth, '')
        assert len(controller.selections) == depth
        for lvl in controller.levels[depth:]:
            assert lvl.selected_code == ''

    def test_empty_code_clears_from_depth(self, controller):
        controller.select(0, 'MA')
        controller.select(1, 'MA-05')
        controller.select(0, '')
        assert controller.selections == ()
        assert controller.phase == SelectionPhase.EMPTY

    def test_negative_depth_rejected(self, controller):
        with pytest.raises(ValueError):
            controller.select(-1, 'MA')


class TestReset:

    def test_reset_is_idempotent(self, controller):
        controller.select(0, 'MA')
        controller.reset()
        once = (controller.selections, controller.levels)
        controller.reset()
        assert (controller.selections, controller.levels) == once
        assert controller.selections == ()

    def test_accepts_transitions_after_reset(self, controller):
        controller.reset()
        controller.select(0, 'TN')
        assert controller.leaf_code == 'TN'


class TestSetFromLeaf:

    def test_restores_full_path(self, controller):
        assert controller.set_from_leaf('MA-05-01') == ['MA', 'MA-05', 'MA-05-01']
        assert [s.area_code for s in controller.selection_path] == ['MA', 'MA-05', 'MA-05-01']
        assert controller.phase == SelectionPhase.PARTIAL

    def test_unknown_leaf_returns_not_found_and_clears(self, controller):
        controller.select(0, 'MA')
        assert controller.set_from_leaf('NOPE') is NOT_FOUND
        assert controller.selections == ()

    def test_empty_leaf_is_plain_reset(self, controller):
        controller.select(0, 'MA')
        assert controller.set_from_leaf('') == []
        assert controller.selections == ()

    def test_without_indices(self, level_types):
        controller = SelectionController(None, level_types)
        assert controller.set_from_leaf('MA') is NOT_FOUND
        assert controller.levels == []
        assert controller.leaf_code == ''


class TestPhase:

    def test_phases(self, controller):
        assert controller.phase == SelectionPhase.EMPTY
        controller.select(0, 'MA')
        assert controller.phase == SelectionPhase.PARTIAL
        controller.select(1, 'MA-01')
        controller.select(2, 'MA-01-01')
        assert controller.phase == SelectionPhase.COMPLETE
        controller.select(0, 'TN')
        assert controller.phase == SelectionPhase.PARTIAL


class TestAutoAdvance:

    def test_one_level_per_tick(self, single_chain):
        indices, types = single_chain
        controller = SelectionController(indices, types, auto_advance=True)
        assert controller.tick() == 0
        assert controller.selections == ('MA',)
        assert controller.tick() == 1
        assert controller.selections == ('MA', 'MA-05')

    def test_matches_manual_selection(self, single_chain):
        indices, types = single_chain
        auto = SelectionController(indices, types, auto_advance=True)
        manual = SelectionController(indices, types)
        auto.tick()
        manual.select(0, 'MA')
        assert auto.selections == manual.selections
        assert auto.levels == manual.levels

    def test_converges_and_stops_at_choice(self, single_chain):
        indices, types = single_chain
        controller = SelectionController(indices, types, auto_advance=True)
        assert controller.converge() == 3
        assert controller.selections == ('MA', 'MA-05', 'MA-05-01')
        assert controller.tick() is None

    def test_disabled_by_default(self, single_chain):
        indices, types = single_chain
        controller = SelectionController(indices, types)
        assert controller.tick() is None
        assert controller.selections == ()

    def test_no_advance_with_multiple_options(self, controller):
        assert controller.advance_single_option() is None

    def test_replaces_stale_single_option(self, single_chain):
        indices, types = single_chain
        controller = SelectionController(indices, types, auto_advance=True, selections=['MA', 'OLD', 'X'])
        assert controller.tick() == 1
        assert controller.selections == ('MA', 'MA-05')


class TestReplaceIndices:

    def test_stale_selections_pruned_after_refresh(self, area_nodes, level_types, controller):
        controller.set_from_leaf('MA-05-01')
        refreshed = [n for n in area_nodes if not n.code.startswith('MA-05')]
        old_indices = controller.indices
        controller.replace_indices(build_indices(refreshed, level_types))
        assert controller.leaf_code == 'MA'
        assert old_indices.get('MA-05') is not None

    def test_none_indices_give_no_levels(self, controller):
        controller.select(0, 'MA')
        controller.replace_indices(None)
        assert controller.levels == []

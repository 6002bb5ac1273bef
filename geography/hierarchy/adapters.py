"""
Geography — Payload Adapters

Convert the flat API payload (geo_area_types / geo_areas, each area
embedding a denormalised geo_area_type object) into resolver types.

@file geography/hierarchy/adapters.py
"""

from typing import Any, Iterable, Mapping

from .types import AreaNode, LevelType, LevelTypeStub


def type_from_payload(item: Mapping[str, Any]) -> LevelType:
    return LevelType(
        id=item['id'],
        code=str(item.get('code', '')),
        name=item.get('name', ''),
        name_ar=item.get('name_ar') or '',
        rank=int(item.get('rank') or 0),
    )


def types_from_payload(items: Iterable[Mapping[str, Any]]) -> list[LevelType]:
    return [type_from_payload(item) for item in items]


def node_from_payload(item: Mapping[str, Any]) -> AreaNode:
    stub = None
    embedded = item.get('geo_area_type')
    if embedded:
        stub = LevelTypeStub(
            id=embedded.get('id', item.get('geo_area_type_id')),
            code=str(embedded.get('code', '')),
            name=embedded.get('name', ''),
            rank=embedded.get('rank'),
        )

    type_id = item.get('geo_area_type_id')
    if type_id is None and stub is not None:
        type_id = stub.id

    return AreaNode(
        code=str(item['code']),
        name=item.get('name', ''),
        name_ar=item.get('name_ar') or '',
        type_id=type_id,
        parent_code=item.get('parent_code') or None,
        sort_order=int(item.get('sort_order') or 0),
        type_stub=stub,
    )


def nodes_from_payload(items: Iterable[Mapping[str, Any]]) -> list[AreaNode]:
    return [node_from_payload(item) for item in items]


def type_to_payload(level_type: LevelType) -> dict[str, Any]:
    return {
        'id': level_type.id,
        'code': level_type.code,
        'name': level_type.name,
        'name_ar': level_type.name_ar,
        'rank': level_type.rank,
    }


def node_to_payload(node: AreaNode, type_by_id: Mapping | None = None) -> dict[str, Any]:
    embedded = None
    level_type = (type_by_id or {}).get(node.type_id)
    if level_type is not None:
        embedded = {'id': level_type.id, 'code': level_type.code, 'name': level_type.name}
    elif node.type_stub is not None:
        embedded = {'id': node.type_stub.id, 'code': node.type_stub.code, 'name': node.type_stub.name}
    return {
        'code': node.code,
        'name': node.name,
        'name_ar': node.name_ar,
        'geo_area_type_id': node.type_id,
        'parent_code': node.parent_code,
        'sort_order': node.sort_order,
        'geo_area_type': embedded,
    }

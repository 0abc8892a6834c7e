"""
原始抽卡记录转换

把接口返回的原始记录（或本地 JSON 记录）转成 DrawEvent 列表。
不负责网络请求。
"""
from typing import Dict, Iterable, List, Mapping

from gacha_luck.draw_event import DrawEvent
from gacha_luck.errors import InvalidArgument

# 卡池类型对应表
CARD_POOL_TYPES = {
    1: "角色活动唤取",
    2: "武器活动唤取",
    3: "角色常驻唤取",
    4: "武器常驻唤取",
    5: "新手唤取",
    6: "新手自选唤取",
    7: "新手自选唤取（感恩定向唤取）",
}


def _to_int(value, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidArgument(f"字段 {field_name} 不是整数: {value!r}") from None


def _to_bool(value, field_name: str) -> bool:
    # "false" 之类的字符串不做转换
    if not isinstance(value, bool):
        raise InvalidArgument(f"字段 {field_name} 不是布尔值: {value!r}")
    return value


def convert_raw_records(raw_records: Iterable[Mapping], pool_type: int = 1,
                        newest_first: bool = True) -> List[DrawEvent]:
    """
    转换接口原始记录

    原始记录格式：
    {
        'cardPoolType': '1',
        'resourceId': 21040013,
        'qualityLevel': 3,
        'resourceType': '武器',
        'name': '暗夜臂铠·夜芒',
        'time': '2024-01-15 10:30:00'
    }

    pool_type: 只保留此卡池类型的记录（记录里没有卡池类型时按此类型处理）
    newest_first: 原始记录是否最新的在前（接口默认如此）
    返回: 按时间顺序（最旧在前）的记录，pull 从1开始编号
    """
    filtered = []
    for item in raw_records:
        raw_pool = item.get('cardPoolType')
        item_pool = _to_int(raw_pool, 'cardPoolType') if raw_pool not in (None, '') else pool_type
        if item_pool == pool_type:
            filtered.append(item)

    chronological = filtered[::-1] if newest_first else filtered

    events = []
    for index, item in enumerate(chronological):
        if 'qualityLevel' not in item:
            raise InvalidArgument(f"记录缺少 qualityLevel 字段: {dict(item)}")
        resource_id = item.get('resourceId')
        events.append(DrawEvent(
            rarity=_to_int(item['qualityLevel'], 'qualityLevel'),
            pull=index + 1,
            name=item.get('name'),
            category='character' if item.get('resourceType') == '角色' else 'weapon',
            time=item.get('time'),
            pool_type=pool_type,
            resource_id=_to_int(resource_id, 'resourceId') if resource_id is not None else None,
        ))
    return events


def convert_pool_records(records_by_pool: Mapping[int, Iterable[Mapping]],
                         newest_first: bool = True) -> Dict[int, List[DrawEvent]]:
    """按卡池分别转换（保底按卡池独立计算，不能混在一起）"""
    return {
        _to_int(pool_type, 'cardPoolType'): convert_raw_records(records, _to_int(pool_type, 'cardPoolType'),
                                                                newest_first=newest_first)
        for pool_type, records in records_by_pool.items()
    }


def merge_pool_records(events_by_pool: Mapping[int, Iterable[DrawEvent]],
                       newest_first: bool = True) -> List[DrawEvent]:
    """
    合并各卡池的记录，按时间排序（仅用于展示）

    各卡池的 pull 编号保持不变，合并后的列表不能再拿去统计保底。
    同一时间的记录（十连）保持卡池内的先后顺序。
    """
    merged = []
    for pool_type in sorted(events_by_pool):
        merged.extend(events_by_pool[pool_type])

    if any(event.time is None for event in merged):
        raise InvalidArgument("合并记录需要每条记录都有 time 字段")

    merged.sort(key=lambda event: event.time)
    if newest_first:
        merged.reverse()
    return merged


def events_from_dicts(items: Iterable[Mapping]) -> List[DrawEvent]:
    """
    本地 JSON 记录 -> DrawEvent
    支持的字段: rarity, pull, name, type/category, time, is_up/isLimited, pool_type/poolType
    """
    events = []
    for item in items:
        if 'rarity' not in item:
            raise InvalidArgument(f"记录缺少 rarity 字段: {dict(item)}")
        is_up = item.get('is_up', item.get('isLimited'))
        pool_type = item.get('pool_type', item.get('poolType'))
        pull = item.get('pull')
        events.append(DrawEvent(
            rarity=_to_int(item['rarity'], 'rarity'),
            pull=_to_int(pull, 'pull') if pull is not None else None,
            name=item.get('name'),
            category=str(item.get('category', item.get('type', 'character'))).lower(),
            time=item.get('time'),
            is_up=_to_bool(is_up, 'is_up') if is_up is not None else None,
            pool_type=_to_int(pool_type, 'pool_type') if pool_type is not None else None,
        ))
    return events

"""
UP判断规则

按顺序逐条判断，第一条给出结论的规则生效：
1. 记录上显式标注的 is_up
2. 常驻卡池类型 -> 非UP
3. 常驻角色名单 -> 非UP
4. UP角色名单 -> UP
5. 活动卡池类型 -> UP
6. 都无法判断时按默认值（活动池的未知新角色算UP）
"""
from typing import Callable, Iterable, Optional, Tuple

from gacha_luck.config import VariantConfig
from gacha_luck.draw_event import DrawEvent

Rule = Callable[[DrawEvent], Optional[bool]]


class UpClassifier:
    """判断五星记录是否为UP"""

    def __init__(self, up_names: Iterable[str] = (), standard_names: Iterable[str] = (),
                 up_pool_types: Iterable[int] = (), standard_pool_types: Iterable[int] = (),
                 default: bool = True):
        self.up_names = frozenset(up_names)
        self.standard_names = frozenset(standard_names)
        self.up_pool_types = frozenset(up_pool_types)
        self.standard_pool_types = frozenset(standard_pool_types)
        self.default = default

        self.rules: Tuple[Tuple[str, Rule], ...] = (
            ('explicit_flag', self._explicit_flag),
            ('standard_pool', self._standard_pool),
            ('standard_name', self._standard_name),
            ('up_name', self._up_name),
            ('up_pool', self._up_pool),
        )

    @classmethod
    def from_variant(cls, variant: VariantConfig) -> 'UpClassifier':
        return cls(
            up_names=variant.up_names,
            standard_names=variant.standard_names,
            up_pool_types=variant.up_pool_types,
            standard_pool_types=variant.standard_pool_types,
        )

    def is_up(self, event: DrawEvent) -> bool:
        return self.explain(event)[0]

    def explain(self, event: DrawEvent) -> Tuple[bool, str]:
        """返回: (是否UP, 生效的规则名)"""
        for rule_name, rule in self.rules:
            verdict = rule(event)
            if verdict is not None:
                return verdict, rule_name
        return self.default, 'default'

    @staticmethod
    def _explicit_flag(event: DrawEvent) -> Optional[bool]:
        return event.is_up

    def _standard_pool(self, event: DrawEvent) -> Optional[bool]:
        if event.pool_type is not None and event.pool_type in self.standard_pool_types:
            return False
        return None

    def _standard_name(self, event: DrawEvent) -> Optional[bool]:
        if event.name in self.standard_names:
            return False
        return None

    def _up_name(self, event: DrawEvent) -> Optional[bool]:
        if event.name in self.up_names:
            return True
        return None

    def _up_pool(self, event: DrawEvent) -> Optional[bool]:
        if event.pool_type is not None and event.pool_type in self.up_pool_types:
            return True
        return None

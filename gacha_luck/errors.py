"""
异常定义
"""


class GachaLuckError(ValueError):
    """所有统计引擎异常的基类"""


class ConfigurationError(GachaLuckError):
    """概率/保底配置不合法（构造引擎时即拒绝）"""


class InvalidArgument(GachaLuckError):
    """调用参数不合法：非正抽数、未知稀有度、抽卡顺序错乱等"""

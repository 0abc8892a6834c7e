"""
保底状态类
"""


class PityState:
    """模拟抽卡时的保底状态"""
    def __init__(self):
        self.ssr_pity_counter = 0  # 五星保底计数
        self.sr_pity_counter = 0  # 四星保底计数
        self.guaranteed = False  # 大保底（上一个五星歪了）
        self.total_pulls = 0  # 总抽数

"""
时间有序ID生成器（UUID v7）

布局: 48位毫秒时间戳 | 版本(7) | 12位序号 | 变体(10) | 62位随机数
同一毫秒内序号递增，保证同进程内生成的ID按字典序严格递增。
"""
import secrets
import threading
import time
import uuid

_TIMESTAMP_MASK = (1 << 48) - 1
_COUNTER_MAX = 0xFFF


class TimeOrderedIdGenerator:
    """UUID v7 字符串ID生成器（线程安全）"""

    def __init__(self, clock=None):
        self._clock = clock or (lambda: time.time_ns() // 1_000_000)
        self._lock = threading.Lock()
        self._last_timestamp = -1
        self._counter = 0

    def next(self) -> str:
        """生成下一个ID"""
        return str(self.next_uuid())

    def next_uuid(self) -> uuid.UUID:
        with self._lock:
            timestamp = self._clock()
            if timestamp > self._last_timestamp:
                # 新的毫秒：序号从随机值开始，保留一半空间用于递增
                self._counter = secrets.randbits(11)
            else:
                # 时钟未前进或回拨：沿用上一个时间戳并递增序号
                timestamp = self._last_timestamp
                self._counter += 1
                if self._counter > _COUNTER_MAX:
                    timestamp += 1
                    self._counter = secrets.randbits(11)
            self._last_timestamp = timestamp
            counter = self._counter

        value = (timestamp & _TIMESTAMP_MASK) << 80
        value |= 0x7 << 76
        value |= counter << 64
        value |= 0b10 << 62
        value |= secrets.randbits(62)
        return uuid.UUID(int=value)


_default_generator = TimeOrderedIdGenerator()


def generate_id() -> str:
    """使用默认生成器生成ID"""
    return _default_generator.next()

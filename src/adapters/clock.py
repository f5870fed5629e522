from datetime import datetime

from src.domain.ports import Clock


class WallClock(Clock):
    def __init__(self, time_format: str = "%H:%M"):
        self.time_format = time_format

    def now_display(self) -> str:
        return datetime.now().strftime(self.time_format)

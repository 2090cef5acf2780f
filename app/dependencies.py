"""Per-request dependencies shared by the route modules."""
import time
from typing import Callable

from fastapi import Request

from app.services.timer_engine import TimerController

Clock = Callable[[], int]


def epoch_ms() -> int:
    return int(time.time() * 1000)


def get_clock() -> Clock:
    return epoch_ms


def get_timer_controller(request: Request) -> TimerController:
    return request.app.state.timers

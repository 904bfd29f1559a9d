import pytest

from schedule_engine.models import BoundingBox, Fragment
from schedule_engine.parser import ScheduleParser


def make_fragment(text, x, y, width=0.15, height=0.02):
    """Fragment whose left edge is ``x`` and vertical centre is ``y``."""
    return Fragment(
        text=text,
        box=BoundingBox(min_x=x, min_y=y - height / 2, max_x=x + width, max_y=y + height / 2),
    )


@pytest.fixture
def frag():
    return make_fragment


@pytest.fixture
def parser():
    return ScheduleParser()

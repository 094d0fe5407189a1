import datetime as dt
import unittest

from timelane.config import TimelineConfig
from timelane.coords import (
    EmptyTimelineError,
    clamp_zoom,
    date_range,
    day_offset_at,
    day_width,
    item_geometry,
    snap_to_grid,
    timeline_width,
    viewport_day_width,
    zoom_in,
    zoom_out,
    zoom_percent,
)
from timelane.model import TimelineItem, Viewport


def _item(i, start: str, end: str) -> TimelineItem:
    return TimelineItem(id=i, start=dt.date.fromisoformat(start), end=dt.date.fromisoformat(end))


class TestCoordinateMapperContract(unittest.TestCase):
    def test_day_width_standard_branch(self) -> None:
        self.assertEqual(day_width(1, 0, 30), 40)
        self.assertEqual(day_width(2.5, 1200, 30), 100)
        self.assertAlmostEqual(day_width(0.3, 0, 30), 12.0)
        self.assertEqual(day_width(0.1, 0, 30), 5)

    def test_day_width_fill_branch(self) -> None:
        self.assertEqual(day_width(0.3, 620, 30), 20)
        self.assertEqual(day_width(0.2, 100, 30), 5)

    def test_day_width_discontinuity_at_half_zoom(self) -> None:
        below = day_width(0.49, 1000, 30)
        at = day_width(0.5, 1000, 30)
        self.assertAlmostEqual(below, 980 / 30)
        self.assertEqual(at, 20)
        self.assertGreater(below, at)

    def test_day_width_respects_config(self) -> None:
        cfg = TimelineConfig(base_day_width=10.0, min_day_width=2.0)
        self.assertEqual(day_width(1, 0, 30, cfg), 10)
        self.assertEqual(day_width(0.1, 0, 30, cfg), 2)

    def test_date_range_pads_five_days(self) -> None:
        items = [
            _item(1, "2024-03-01", "2024-03-05"),
            _item(2, "2024-03-03", "2024-03-08"),
        ]
        rng = date_range(items)
        self.assertEqual(rng.start_date, dt.date(2024, 2, 25))
        self.assertEqual(rng.end_date, dt.date(2024, 3, 13))
        self.assertEqual(rng.total_days, 17)

    def test_date_range_empty_is_degenerate(self) -> None:
        with self.assertRaises(EmptyTimelineError):
            date_range([])

    def test_item_geometry_includes_end_day(self) -> None:
        geo = item_geometry(_item(1, "2024-03-01", "2024-03-05"), dt.date(2024, 2, 25), 40)
        self.assertEqual(geo.left, 200)
        self.assertEqual(geo.width, 200)
        one_day = item_geometry(_item(2, "2024-03-01", "2024-03-01"), dt.date(2024, 2, 25), 40)
        self.assertEqual(one_day.width, 40)

    def test_snap_rounds_half_up(self) -> None:
        self.assertEqual(snap_to_grid(415, 40), 400)
        self.assertEqual(snap_to_grid(420, 40), 440)
        self.assertEqual(day_offset_at(20, 40), 1)
        self.assertEqual(day_offset_at(-20, 40), 0)
        self.assertEqual(day_offset_at(-21, 40), -1)

    def test_timeline_width(self) -> None:
        self.assertEqual(timeline_width(17, 40), 680)

    def test_zoom_controls(self) -> None:
        self.assertAlmostEqual(zoom_in(1.0), 1.2)
        self.assertEqual(zoom_in(2.9), 3.0)
        self.assertAlmostEqual(zoom_out(1.0), 0.8)
        self.assertEqual(zoom_out(0.2), 0.125)
        self.assertEqual(clamp_zoom(10), 3.0)
        self.assertEqual(clamp_zoom(0), 0.125)
        self.assertEqual(zoom_percent(1.0), 100)
        self.assertEqual(zoom_percent(0.125), 13)

    def test_viewport_day_width_clamps_zoom(self) -> None:
        items = [_item(1, "2024-03-01", "2024-03-21")]
        rng = date_range(items)
        self.assertEqual(viewport_day_width(Viewport(zoom=9, container_width=0), rng), 120)


if __name__ == "__main__":
    unittest.main(verbosity=2)

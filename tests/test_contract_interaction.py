import datetime as dt
import unittest

from timelane.config import config_from_env
from timelane.interaction import (
    DRAGGING,
    IDLE,
    LEFT,
    RESIZING,
    RIGHT,
    ResizeSession,
    TimelineController,
    drag_offset_within,
    finish_drag,
    lane_at_y,
    preview_drag,
    propose_new_item,
    propose_rename,
    propose_resize,
    uniform_lane_bounds,
)
from timelane.model import ItemChange, TimelineItem, apply_change

ORIGIN = dt.date(2024, 2, 25)
DW = 40.0


def _d(s: str) -> dt.date:
    return dt.date.fromisoformat(s)


def _item(i, start: str, end: str, name: str = "") -> TimelineItem:
    return TimelineItem(id=i, start=_d(start), end=_d(end), name=name)


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestCreateOnClickContract(unittest.TestCase):
    def test_click_floors_to_day_and_defaults(self) -> None:
        item = propose_new_item(415, DW, ORIGIN, item_count=4, new_id=7)
        self.assertEqual(item.id, 7)
        self.assertEqual(item.start, _d("2024-03-06"))
        self.assertEqual(item.end, _d("2024-03-13"))
        self.assertEqual(item.name, "New Event")
        self.assertEqual(item.color_scheme, "secondary")

    def test_color_round_robin_by_count(self) -> None:
        names = [propose_new_item(0, DW, ORIGIN, n, n).color_scheme for n in range(4)]
        self.assertEqual(names, ["primary", "secondary", "tertiary", "primary"])


class TestDragContract(unittest.TestCase):
    def setUp(self) -> None:
        self.items = [
            _item(1, "2024-03-01", "2024-03-05"),
            _item(2, "2024-03-03", "2024-03-08"),
        ]
        self.bounds = uniform_lane_bounds(2, 60)

    def test_lane_bounds_and_hit_test(self) -> None:
        self.assertEqual(self.bounds, [(0, 60), (60, 120)])
        self.assertEqual(lane_at_y(30, self.bounds), 0)
        self.assertEqual(lane_at_y(90, self.bounds), 1)
        self.assertEqual(lane_at_y(60, self.bounds), 0)
        self.assertIsNone(lane_at_y(200, self.bounds))
        self.assertEqual(uniform_lane_bounds(1, 50, top=10), [(10, 60)])

    def test_preview_snaps_to_day_grid(self) -> None:
        offset = drag_offset_within(215, 200)
        self.assertEqual(offset, 15)
        p = preview_drag(530, 90, 100, offset, DW, self.bounds)
        self.assertEqual(p.left, 400)
        self.assertEqual(p.lane_index, 1)

    def test_finish_same_lane_preserves_duration(self) -> None:
        out = finish_drag(self.items, 1, 0, 400, 0, ORIGIN, DW)
        self.assertFalse(out.lane_rejected)
        self.assertEqual(out.change, ItemChange(id=1, start=_d("2024-03-06"), end=_d("2024-03-10")))

    def test_finish_into_busy_lane_uses_gap_finder(self) -> None:
        out = finish_drag(self.items, 1, 0, 400, 1, ORIGIN, DW)
        self.assertFalse(out.lane_rejected)
        self.assertEqual(out.change, ItemChange(id=1, start=_d("2024-03-09"), end=_d("2024-03-13"), lane_index=1))
        self.assertEqual((out.change.end - out.change.start).days, 4)

    def test_rejected_lane_move_commits_dates_only(self) -> None:
        items = [
            _item(1, "2024-03-01", "2024-03-05"),
            _item(2, "2024-03-03", "2024-05-30"),
        ]
        out = finish_drag(items, 1, 0, 400, 1, ORIGIN, DW)
        self.assertTrue(out.lane_rejected)
        self.assertIsNotNone(out.rejection)
        self.assertEqual(out.change, ItemChange(id=1, start=_d("2024-03-06"), end=_d("2024-03-10")))
        self.assertIsNone(out.change.lane_index)

    def test_unknown_item_is_noop(self) -> None:
        self.assertTrue(finish_drag(self.items, 99, 0, 400, 1, ORIGIN, DW).change.is_empty)


class TestResizeContract(unittest.TestCase):
    def setUp(self) -> None:
        self.item = _item(1, "2024-03-01", "2024-03-05")

    def test_left_edge(self) -> None:
        self.assertEqual(propose_resize(self.item, LEFT, 280, ORIGIN, DW).start, _d("2024-03-03"))
        self.assertIsNone(propose_resize(self.item, LEFT, 360, ORIGIN, DW))  # start == end
        self.assertIsNone(propose_resize(self.item, LEFT, 400, ORIGIN, DW))

    def test_right_edge(self) -> None:
        change = propose_resize(self.item, RIGHT, 480, ORIGIN, DW)
        self.assertEqual((change.start, change.end), (_d("2024-03-01"), _d("2024-03-08")))
        self.assertIsNone(propose_resize(self.item, RIGHT, 200, ORIGIN, DW))  # end == start
        self.assertIsNone(propose_resize(self.item, RIGHT, 160, ORIGIN, DW))

    def test_unknown_direction(self) -> None:
        with self.assertRaises(ValueError):
            propose_resize(self.item, "up", 0, ORIGIN, DW)

    def test_accepted_resizes_never_collapse(self) -> None:
        for px in range(-200, 1200, 7):
            for direction in (LEFT, RIGHT):
                change = propose_resize(self.item, direction, px, ORIGIN, DW)
                if change is not None:
                    self.assertLess(change.start, change.end)

    def test_throttled_session_matches_last_event(self) -> None:
        clock = FakeClock()
        item = _item(1, "2024-03-01", "2024-03-10")
        s = ResizeSession(item, LEFT, ORIGIN, DW, throttle_ms=50, clock=clock)

        self.assertEqual(s.move(280).start, _d("2024-03-03"))
        clock.now = 10
        self.assertIsNone(s.move(300))
        clock.now = 20
        self.assertIsNone(s.move(320))
        self.assertEqual(s.current.start, _d("2024-03-03"))

        final = s.finish()
        expected = propose_resize(item, LEFT, 320, ORIGIN, DW)
        self.assertEqual(final, expected)

    def test_session_keeps_last_valid_dates(self) -> None:
        clock = FakeClock()
        s = ResizeSession(self.item, RIGHT, ORIGIN, DW, throttle_ms=0, clock=clock)
        self.assertEqual(s.move(400).end, _d("2024-03-06"))
        self.assertIsNone(s.move(100))
        self.assertEqual(s.current.end, _d("2024-03-06"))
        self.assertEqual(s.finish(), ItemChange(id=1, start=_d("2024-03-01"), end=_d("2024-03-06")))

    def test_cancel_restores_original(self) -> None:
        s = ResizeSession(self.item, RIGHT, ORIGIN, DW, throttle_ms=0, clock=FakeClock())
        s.move(400)
        s.cancel()
        self.assertIsNone(s.finish())


class TestControllerContract(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = FakeClock()
        self.ctl = TimelineController(clock=self.clock, id_factory=lambda: 99)
        self.items = [
            _item(1, "2024-03-01", "2024-03-05", "Kickoff"),
            _item(2, "2024-03-03", "2024-03-08", "Build"),
        ]

    def test_click_requires_press_on_background(self) -> None:
        self.assertIsNone(self.ctl.background_click(self.items, 415, ORIGIN, DW))
        self.ctl.background_press()
        item = self.ctl.background_click(self.items, 415, ORIGIN, DW)
        self.assertEqual(item.id, 99)
        self.assertEqual(item.color_scheme, "tertiary")
        self.assertEqual(self.ctl.editing_item_id, 99)

    def test_editing_blocks_drag_and_resize(self) -> None:
        self.assertTrue(self.ctl.begin_edit(1))
        self.assertIsNone(self.ctl.begin_drag(self.items[0], 0, 215, 200))
        self.assertIsNone(self.ctl.begin_resize(self.items[0], LEFT, ORIGIN, DW))
        change = self.ctl.submit_edit(self.items, "Kickoff meeting")
        self.assertEqual(change, ItemChange(id=1, name="Kickoff meeting"))
        self.assertFalse(self.ctl.is_editing)
        self.assertIsNotNone(self.ctl.begin_drag(self.items[0], 0, 215, 200))

    def test_blur_commits_like_submit(self) -> None:
        self.ctl.begin_edit(2)
        self.assertEqual(self.ctl.blur_edit(self.items, "Ship"), ItemChange(id=2, name="Ship"))

    def test_drag_lifecycle(self) -> None:
        bounds = uniform_lane_bounds(2, 60)
        self.assertEqual(self.ctl.state, IDLE)
        self.ctl.begin_drag(self.items[0], 0, 215, 200)
        self.assertEqual(self.ctl.state, DRAGGING)
        self.assertIsNone(self.ctl.begin_resize(self.items[1], RIGHT, ORIGIN, DW))
        self.assertFalse(self.ctl.begin_edit(2))

        self.ctl.background_press()
        self.assertIsNone(self.ctl.background_click(self.items, 10, ORIGIN, DW))

        p = self.ctl.drag_move(530, 90, 100, DW, bounds)
        self.assertEqual((p.left, p.lane_index), (400, 1))

        out = self.ctl.end_drag(self.items, 530, 90, 100, ORIGIN, DW, bounds)
        self.assertEqual(self.ctl.state, IDLE)
        self.assertEqual(out.change.lane_index, 1)
        self.assertEqual(out.change.start, _d("2024-03-09"))

    def test_lane_bounds_follow_configured_height(self) -> None:
        self.assertEqual(self.ctl.lane_bounds(2), [(0.0, 60.0), (60.0, 120.0)])

        tall = TimelineController(config_from_env({"TIMELANE_LANE_HEIGHT": "80"}), clock=self.clock)
        bounds = tall.lane_bounds(3, top=10)
        self.assertEqual(bounds, [(10.0, 90.0), (90.0, 170.0), (170.0, 250.0)])
        self.assertEqual(lane_at_y(100, bounds), 1)
        self.assertEqual(tall.lane_bounds(0), [])

        # y=130 is below two 60px lanes but inside the second 80px lane.
        self.assertIsNone(lane_at_y(130, self.ctl.lane_bounds(2)))
        tall.begin_drag(self.items[0], 0, 215, 200)
        p = tall.drag_move(530, 130, 100, DW, tall.lane_bounds(2))
        self.assertEqual(p.lane_index, 1)

    def test_release_outside_lanes_keeps_original_lane(self) -> None:
        bounds = uniform_lane_bounds(2, 60)
        self.ctl.begin_drag(self.items[0], 0, 215, 200)
        out = self.ctl.end_drag(self.items, 530, 500, 100, ORIGIN, DW, bounds)
        self.assertEqual(out.change, ItemChange(id=1, start=_d("2024-03-06"), end=_d("2024-03-10")))

    def test_cancel_drag_discards_preview(self) -> None:
        self.ctl.begin_drag(self.items[0], 0, 215, 200)
        self.ctl.cancel_drag()
        self.assertEqual(self.ctl.state, IDLE)
        self.assertIsNone(self.ctl.end_drag(self.items, 0, 0, 0, ORIGIN, DW, []))

    def test_resize_lifecycle(self) -> None:
        s = self.ctl.begin_resize(self.items[0], RIGHT, ORIGIN, DW)
        self.assertIsNotNone(s)
        self.assertEqual(self.ctl.state, RESIZING)
        self.assertIsNone(self.ctl.begin_drag(self.items[1], 1, 0, 0))
        self.assertIsNotNone(self.ctl.resize_move(480))
        self.clock.now = 5
        self.assertIsNone(self.ctl.resize_move(520))
        final = self.ctl.end_resize()
        self.assertEqual(self.ctl.state, IDLE)
        self.assertEqual(final, ItemChange(id=1, start=_d("2024-03-01"), end=_d("2024-03-09")))

        updated = apply_change(self.items, final)
        self.assertEqual(updated[0].end, _d("2024-03-09"))
        self.assertEqual(updated[1], self.items[1])

    def test_cycle_color_and_rename(self) -> None:
        self.assertEqual(self.ctl.cycle_color(self.items[0]), ItemChange(id=1, color_scheme="secondary"))
        self.assertEqual(propose_rename(self.items[1], "X"), ItemChange(id=2, name="X"))


if __name__ == "__main__":
    unittest.main(verbosity=2)

from __future__ import annotations

import math
import unittest

from energy_graph.errors import UndefinedTangentError
from energy_graph.svg.path import CubicSegment, LinearSegment, Point, QuadraticSegment


def _texts(segment) -> list[str]:
    return [str(command) for command in segment.get_commands()]


class PathSegmentTests(unittest.TestCase):
    def test_start_is_first_point(self) -> None:
        for cls in (LinearSegment, QuadraticSegment, CubicSegment):
            segment = cls([(3, 4), (5, 6)])
            self.assertEqual(segment.get_start(), Point(3.0, 4.0))

    def test_empty_point_list_rejected(self) -> None:
        for cls in (LinearSegment, QuadraticSegment, CubicSegment):
            with self.assertRaises(ValueError):
                cls([])

    def test_linear_emits_line_per_remaining_point(self) -> None:
        self.assertEqual(_texts(LinearSegment([(0, 0), (1, 1), (2, 0)])), ["L 1 1", "L 2 0"])

    def test_quadratic_starts_with_midpoint_control(self) -> None:
        segment = QuadraticSegment([(0, 0), (2, 2), (4, 0), (6, 2)])
        self.assertEqual(_texts(segment), ["Q 1 1, 2 2", "T 4 0", "T 6 2"])

    def test_single_point_segments_have_no_commands(self) -> None:
        for cls in (LinearSegment, QuadraticSegment, CubicSegment):
            self.assertEqual(_texts(cls([(1, 1)])), [])

    def test_cubic_control_points(self) -> None:
        segment = CubicSegment([(0, 0), (1, 1), (2, 0)])
        self.assertEqual(_texts(segment), ["S 0.5 1, 1 1", "S 1.5 0.25, 2 0"])

    def test_cubic_visits_every_point_in_order(self) -> None:
        points = [(0, 5), (10, 7), (20, 3), (30, 9), (40, 1)]
        ends = [command.end for command in CubicSegment(points).get_commands()]
        self.assertEqual(ends, [Point(float(x), float(y)) for x, y in points[1:]])

    def test_cubic_with_shared_neighbour_x_stays_finite(self) -> None:
        for points in ([(1, 0), (1, 1), (1, 2)], [(0, 0), (1, 1), (0, 2)]):
            commands = list(CubicSegment(points).get_commands())
            self.assertEqual(len(commands), 2)
            for command in commands:
                for p in command.points:
                    self.assertTrue(math.isfinite(p.x) and math.isfinite(p.y))

    def test_cubic_shared_neighbour_x_uses_flat_tangent(self) -> None:
        commands = list(CubicSegment([(0, 0), (1, 1), (0, 2)]).get_commands())
        self.assertEqual(commands[0].points[0], Point(0.5, 1.0))

    def test_strict_cubic_raises_on_undefined_tangent(self) -> None:
        segment = CubicSegment([(1, 0), (1, 1), (1, 2)], strict=True)
        with self.assertRaises(UndefinedTangentError):
            list(segment.get_commands())

    def test_segments_can_be_reevaluated(self) -> None:
        segment = CubicSegment([(0, 0), (1, 1), (2, 0)])
        self.assertEqual(_texts(segment), _texts(segment))


if __name__ == "__main__":
    unittest.main()

import numpy as np
import pytest

from lrfsim.core.exceptions import InvalidPoseError, NotCoplanarError
from lrfsim.geometry.plane import Plane, intersection_line, plane_in_frame
from lrfsim.geometry.polygon import Polygon
from lrfsim.geometry.pose import Pose


def test_plane_vector_from_pose() -> None:
    # z=0 plane of a frame rotated so its normal points along +X, located at x=3
    plane = Plane(Pose.from_xyz_rpy((3.0, 1.0, -2.0), (0.0, 90.0, 0.0)))
    np.testing.assert_allclose(plane.normal, [1.0, 0.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(plane.vector, [1.0, 0.0, 0.0, -3.0], atol=1e-12)
    assert plane.M.shape == (4, 3)


def test_local_world_round_trip() -> None:
    plane = Plane(Pose.from_xyz_rpy((0.5, -1.0, 2.0), (20.0, -35.0, 110.0)))
    rng = np.random.default_rng(0)
    local = rng.uniform(-3.0, 3.0, size=(50, 2))
    world = plane.local_to_world(local)
    np.testing.assert_allclose(plane.distance(world), 0.0, atol=1e-12)
    np.testing.assert_allclose(plane.world_to_local(world), local, atol=1e-12)
    np.testing.assert_allclose(plane.local_to_world(plane.world_to_local(world)), world, atol=1e-12)


def test_world_to_local_rejects_points_off_plane() -> None:
    plane = Plane(Pose.identity())
    with pytest.raises(NotCoplanarError) as err:
        plane.world_to_local(np.array([[0.0, 0.0, 0.0], [1.0, 1.0, 1e-3]]))
    assert err.value.max_distance == pytest.approx(1e-3)


def test_plane_in_frame_uses_dual_transform() -> None:
    # World plane x = 5; frame translated to x=2 and yawed by 90 degrees
    world_plane = np.array([1.0, 0.0, 0.0, -5.0])
    pose = Pose.from_xyz_rpy((2.0, 0.0, 0.0), (0.0, 0.0, 90.0))
    local = plane_in_frame(pose, world_plane)
    # World +X is the frame's -Y axis, plane 3 m away
    np.testing.assert_allclose(local, [0.0, -1.0, 0.0, -3.0], atol=1e-12)
    point_local = np.array([[0.0, -3.0, 7.0]])
    np.testing.assert_allclose(pose.apply(point_local)[0, 0], 5.0)


def test_intersection_line_is_normalised() -> None:
    pose = Pose.identity()
    line = intersection_line(pose, np.array([2.0, 0.0, 1.0, -4.0]))
    np.testing.assert_allclose(line, [1.0, 0.0, -2.0])
    parallel = intersection_line(pose, np.array([0.0, 0.0, 1.0, -1.0]))
    assert not np.all(np.isfinite(parallel))


def test_polygon_from_points_frame() -> None:
    pts = np.array([[0.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 1.0, 1.0], [0.0, 0.0, 1.0]])
    pol = Polygon.from_points(pts)
    np.testing.assert_allclose(pol.pose.t, pts[0])
    np.testing.assert_allclose(pol.pose.R[:, 0], [0.0, 1.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(pol.normal, [1.0, 0.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(pol.vertices, [[0, 0], [1, 0], [1, 1], [0, 1]], atol=1e-12)
    np.testing.assert_allclose(pol.vertices_3d, pts, atol=1e-12)
    np.testing.assert_allclose(pol.centroid, [0.0, 0.5, 0.5], atol=1e-12)


def test_polygon_from_points_rejects_non_coplanar() -> None:
    pts = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [1.0, 1.0, 0.0], [0.0, 1.0, 0.2]])
    with pytest.raises(NotCoplanarError):
        Polygon.from_points(pts)


def test_polygon_from_points_rejects_collinear() -> None:
    pts = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [2.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
    with pytest.raises(InvalidPoseError):
        Polygon.from_points(pts)


def test_polygon_requires_four_vertices() -> None:
    with pytest.raises(ValueError):
        Polygon(Pose.identity(), np.zeros((3, 2)))


def test_contains_interior_exterior_and_boundary() -> None:
    pol = Polygon(Pose.identity(), np.array([[0.0, 0.0], [2.0, 0.0], [2.0, 1.0], [0.0, 1.0]]))
    pts = np.array(
        [
            [1.0, 0.5],   # interior
            [3.0, 0.5],   # right of polygon
            [1.0, -0.1],  # below
            [2.0, 0.5],   # on right edge
            [1.0, 0.0],   # on bottom edge
            [0.0, 0.0],   # vertex
            [2.0, 1.0],   # vertex
            [0.0, 0.5],   # on left edge
        ]
    )
    assert pol.contains(pts).tolist() == [True, False, False, True, True, True, True, True]
    assert pol.contains(np.zeros((0, 2))).shape == (0,)


def test_contains_non_convex_quad() -> None:
    # Arrowhead pointing +X with its notch at (0.5, 1)
    pol = Polygon(Pose.identity(), np.array([[0.0, 0.0], [2.0, 1.0], [0.0, 2.0], [0.5, 1.0]]))
    pts = np.array([[1.0, 1.0], [0.25, 1.0], [1.5, 0.5]])
    assert pol.contains(pts).tolist() == [True, False, False]


def test_contains_world_checks_plane_membership() -> None:
    pol = Polygon.from_points(np.array([[0, 0, 1], [1, 0, 1], [1, 1, 1], [0, 1, 1]], dtype=float))
    assert pol.contains_world(np.array([[0.5, 0.5, 1.0], [1.5, 0.5, 1.0]])).tolist() == [True, False]
    with pytest.raises(NotCoplanarError):
        pol.contains_world(np.array([[0.5, 0.5, 0.0]]))

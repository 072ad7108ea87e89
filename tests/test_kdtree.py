import numpy as np
import pytest

from raytracer.kdtree import KDTNode, KDTree
from raytracer.objects import Sphere
from raytracer.ray import Hit, Ray


def _spheres():
    centers = [
        (0, 0, 0),
        (3, 0, 0),
        (-3, 1, 0),
        (0, 3, 2),
        (2, -3, 1),
        (-2, -2, -2),
        (4, 4, 4),
    ]
    return [Sphere(c, 0.8) for c in centers]


def _rays():
    origin = np.array([0.0, 0.0, -10.0])
    for x in np.linspace(-5, 5, 9):
        for y in np.linspace(-5, 5, 9):
            yield Ray(origin, np.array([x, y, 10.0]) - origin)


def test_empty_tree_raises():
    with pytest.raises(ValueError):
        KDTree([])


def test_single_object_is_root():
    sphere = Sphere((1, 2, 3), 1.0)
    tree = KDTree([sphere])
    assert tree.root is sphere


def test_root_box_encloses_all_objects():
    spheres = _spheres()
    tree = KDTree(spheres)
    assert isinstance(tree.root, KDTNode)
    lows = np.min([s.aabb.l for s in spheres], axis=0)
    highs = np.max([s.aabb.r for s in spheres], axis=0)
    assert tree.root.aabb.l.tolist() == pytest.approx(lows.tolist())
    assert tree.root.aabb.r.tolist() == pytest.approx(highs.tolist())


def test_tree_matches_brute_force():
    spheres = _spheres()
    tree = KDTree(spheres)
    for ray in _rays():
        tree_hit = Hit()
        tree_result = tree.intersect(ray, tree_hit, 0.0)
        brute_hit = Hit()
        brute_result = False
        for s in spheres:
            brute_result = s.intersect(ray, brute_hit, 0.0) or brute_result
        assert tree_result == brute_result
        assert tree_hit.t == pytest.approx(brute_hit.t)


def test_node_rejects_ray_missing_box():
    left = Sphere((0, 0, 0), 1.0)
    right = Sphere((3, 0, 0), 1.0)
    node = KDTNode(np.array([-2.0, -2.0, -2.0]), np.array([5.0, 2.0, 2.0]), left, right)
    hit = Hit()
    assert node.intersect(Ray((0, 10, -10), (0, 0, 1)), hit, 0.0) is False
    assert hit.t == Hit().t
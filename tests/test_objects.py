import numpy as np
import pytest

from raytracer.linalg import translation, uniform_scaling
from raytracer.objects import (
    Group,
    Plane,
    Sphere,
    Transform,
    Triangle,
    VectorPlace,
)
from raytracer.ray import Hit, Ray


def test_vector_place():
    s = Sphere((0, 0, 0), 1.0)
    assert s.vector_place((0, 0, 0)) is VectorPlace.INSIDE
    assert s.vector_place((1, 0, 0)) is VectorPlace.ON_EDGE
    assert s.vector_place((5, 0, 0)) is VectorPlace.OUTSIDE


def test_sphere_hit_from_outside_lies_on_surface():
    material = object()
    s = Sphere((1, 2, 3), 1.5, material)
    ray = Ray((1, 2, -10), (0.1, 0.05, 1))
    hit = Hit()
    assert s.intersect(ray, hit, 0.0) is True
    point = ray.point_at(hit.t)
    assert np.linalg.norm(point - s.center) == pytest.approx(1.5)
    assert np.linalg.norm(hit.normal) == pytest.approx(1.0)
    assert np.dot(hit.normal, ray.direction) < 0
    assert hit.material is material


def test_sphere_hit_from_inside_faces_inward():
    s = Sphere((0, 0, 0), 2.0)
    ray = Ray((0, 0, 0), (0, 0, 1))
    hit = Hit()
    assert s.intersect(ray, hit, 0.0)
    assert hit.t == pytest.approx(2.0)
    assert np.dot(hit.normal, ray.direction) < 0


def test_sphere_behind_ray_missed():
    s = Sphere((0, 0, -5), 1.0)
    assert s.intersect(Ray((0, 0, 0), (0, 0, 1)), Hit(), 0.0) is False


def test_sphere_respects_closer_existing_hit():
    s = Sphere((0, 0, 10), 1.0)
    hit = Hit()
    hit.set(2.0, None, (0, 1, 0))
    assert s.intersect(Ray((0, 0, 0), (0, 0, 1)), hit, 0.0) is False
    assert hit.t == 2.0


def test_sphere_box_encloses_sphere():
    s = Sphere((1, 1, 1), 2.0)
    assert (s.aabb.l < s.center - 2.0).tolist() == [True, True, True]
    assert (s.aabb.r > s.center + 2.0).tolist() == [True, True, True]


def test_plane_hit_on_plane_and_normal_faces_ray():
    plane = Plane((0, 1, 0), -1.0)
    ray = Ray((0.5, 5, 0.3), (0.2, -1, 0.1))
    hit = Hit()
    assert plane.intersect(ray, hit, 0.0)
    assert np.dot(plane.normal, ray.point_at(hit.t)) == pytest.approx(-1.0)
    assert np.dot(hit.normal, ray.direction) < 0


def test_plane_parallel_and_away_rays_miss():
    plane = Plane((0, 1, 0), 0.0)
    assert plane.intersect(Ray((0, 1, 0), (1, 0, 0)), Hit(), 0.0) is False
    assert plane.intersect(Ray((0, 1, 0), (0, 1, 0)), Hit(), 0.0) is False


def test_triangle_hit_and_miss():
    tri = Triangle((0, 0, 0), (1, 0, 0), (0, 1, 0))
    hit = Hit()
    ray = Ray((0.2, 0.2, 1), (0, 0, -1))
    assert tri.intersect(ray, hit, 0.0)
    assert np.allclose(ray.point_at(hit.t), [0.2, 0.2, 0.0])
    assert np.allclose(np.abs(hit.normal), [0, 0, 1])
    assert tri.intersect(Ray((0.8, 0.8, 1), (0, 0, -1)), Hit(), 0.0) is False


def test_triangle_parallel_ray_misses():
    tri = Triangle((0, 0, 0), (1, 0, 0), (0, 1, 0))
    assert tri.intersect(Ray((0.2, 0.2, 1), (1, 0, 0)), Hit(), 0.0) is False


def test_triangle_box_is_vertex_extent():
    tri = Triangle((0, 3, -1), (2, 0, 5), (-1, 1, 0))
    assert tri.aabb.l.tolist() == [-1.0, 0.0, -1.0]
    assert tri.aabb.r.tolist() == [2.0, 3.0, 5.0]


def test_translated_sphere_matches_moved_sphere():
    ray = Ray((0, 0, -10), (0.2, 0.05, 1))
    moved = Sphere((2, 0, 0), 1.0)
    expected = Hit()
    assert moved.intersect(ray, expected, 0.0)
    transformed = Transform(translation((2, 0, 0)), Sphere((0, 0, 0), 1.0))
    got = Hit()
    assert transformed.intersect(ray, got, 0.0)
    assert got.t == pytest.approx(expected.t)
    assert np.allclose(got.normal, expected.normal)


def test_scaled_sphere_matches_bigger_sphere():
    ray = Ray((0, 0, -10), (0.1, 0.1, 1))
    bigger = Sphere((0, 0, 0), 2.0)
    expected = Hit()
    assert bigger.intersect(ray, expected, 0.0)
    transformed = Transform(uniform_scaling(2.0), Sphere((0, 0, 0), 1.0))
    got = Hit()
    assert transformed.intersect(ray, got, 0.0)
    assert got.t == pytest.approx(expected.t)
    assert np.allclose(got.normal, expected.normal)


def _group(build):
    group = Group(3)
    group.add_object(0, Sphere((0, 0, 10), 1.0))
    group.add_object(1, Sphere((0, 0, 5), 1.0))
    group.add_object(2, Plane((0, 0, 1), 20.0))
    if build:
        group.build_tree()
    return group


@pytest.mark.parametrize("build", [False, True])
def test_group_finds_closest(build):
    group = _group(build)
    ray = Ray((0, 0, 0), (0, 0, 1))
    hit = Hit()
    assert group.intersect(ray, hit, 0.0)
    near = Hit()
    group[1].intersect(ray, near, 0.0)
    assert hit.t == pytest.approx(near.t)


def test_group_tree_and_loop_agree():
    loop, tree = _group(False), _group(True)
    for x in np.linspace(-2, 2, 7):
        ray = Ray((x, 0.3, 0), (0, 0, 1))
        h1, h2 = Hit(), Hit()
        assert loop.intersect(ray, h1, 0.0) == tree.intersect(ray, h2, 0.0)
        assert h1.t == pytest.approx(h2.t)


def test_group_add_out_of_range():
    group = Group(1)
    with pytest.raises(IndexError):
        group.add_object(1, Sphere())
    with pytest.raises(IndexError):
        group.add_object(-1, Sphere())


def test_group_build_tree_requires_full_slots():
    group = Group(2)
    group.add_object(0, Sphere())
    with pytest.raises(ValueError):
        group.build_tree()
    assert len(group) == 2
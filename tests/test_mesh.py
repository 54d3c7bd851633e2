import numpy as np

from lumenscene.geometry import AttributeKind, Geometry
from lumenscene.globals import ShadingModel
from lumenscene.material import Material
from lumenscene.mesh import Mesh


class Holder:
    def __init__(self, matrix):
        self.world_matrix = np.asarray(matrix, dtype=float)


def tri_geometry():
    geom = Geometry()
    geom.set_attribute(AttributeKind.POSITION, [0, 0, 0, 1, 0, 0, 0, 1, 0])
    geom.set_index([0, 1, 2])
    return geom


def make_tree():
    root = Mesh(tri_geometry(), Material())
    child = Mesh(tri_geometry(), Material())
    root.add_mesh(child)
    return root, child


def test_flags_propagate():
    root, child = make_tree()
    root.enable_cast_shadow(True)
    root.enable_face_cull(False)
    root.set_shading_mode(ShadingModel.PBR)
    assert child.cast_shadow is True
    assert child.use_cull is False
    assert child.shading_mode is ShadingModel.PBR


def test_colors_propagate():
    root, child = make_tree()
    root.set_emission((1, 2, 3))
    root.set_diffuse((0.5, 0.5, 0.5))
    assert np.allclose(child.material.emission, [1, 2, 3])
    assert np.allclose(root.material.diffuse, [0.5, 0.5, 0.5])


def test_clone_shares_material_but_not_children():
    root, child = make_tree()
    copy = root.clone()
    assert copy.material is root.material
    assert copy.geometry is root.geometry
    assert len(copy.submeshes) == 1
    assert copy.submeshes[0] is not child
    copy.add_mesh(Mesh())
    assert len(root.submeshes) == 1


def test_world_matrix_from_parent():
    root, child = make_tree()
    matrix = np.eye(4)
    matrix[:3, 3] = [1, 2, 3]
    holder = Holder(matrix)
    root.set_parent_object(holder)
    assert np.allclose(child.world_matrix(), matrix)
    assert child.parent_object is holder


def test_world_matrix_own_after_parent_gone():
    root, _ = make_tree()
    own = np.diag([2.0, 2.0, 2.0, 1.0])
    root.update_world_matrix(own)
    holder = Holder(np.eye(4))
    root.set_parent_object(holder)
    del holder
    assert root.parent_object is None
    assert np.allclose(root.world_matrix(), own)


def test_fetch_triangle_carries_material():
    root, _ = make_tree()
    tri = root.fetch_triangle(0)
    assert tri.material is root.material
    assert np.allclose(tri.v1, [1, 0, 0])


def test_fetch_triangle_without_geometry():
    assert Mesh().fetch_triangle(0) is None
# Minimal Qt3D viewer for a curve scene (PySide6 render adapter)
# Deps: PySide6 + numpy. Works with the scene/index modules.
#
# Usage:
#   python viewer_qt3d.py [heart|zigzag|arch]
#
# Notes:
# - Curves are uploaded as LineStrip geometry, control points as Points,
#   grid and axes as Lines.
# - A triangle marker follows one curve; a QTimer drives a tangent.Mover and
#   copies its position/heading into the marker's QTransform.

import math
import sys

import numpy as np
from PySide6.QtCore import QTimer
from PySide6.QtGui import QColor, QVector3D
from PySide6.QtWidgets import QApplication
from PySide6.Qt3DCore import Qt3DCore
from PySide6.Qt3DExtras import Qt3DExtras
from PySide6.Qt3DRender import Qt3DRender

QAttribute = Qt3DCore.QAttribute
QBuffer = Qt3DCore.QBuffer
QEntity = Qt3DCore.QEntity
QGeometry = Qt3DCore.QGeometry
QTransform = Qt3DCore.QTransform
QPhongMaterial = Qt3DExtras.QPhongMaterial
Qt3DWindow = Qt3DExtras.Qt3DWindow
QGeometryRenderer = Qt3DRender.QGeometryRenderer

import control_points as cp
import index
import query as q
import scene as sc
from tangent import Mover

CURVE_COLORS = {
    'global': '#ff00ff',
    'bezier': '#ff00ff',
    'catmull-rom': '#00ff00',
}


def _np_to_bytes(arr, dtype=np.float32):
    a = np.ascontiguousarray(arr, dtype=dtype)
    return a.tobytes(), a


def _compute_vertex_normals(verts, faces):
    V = np.asarray(verts, dtype=np.float32)
    F = np.asarray(faces, dtype=np.int32)
    N = np.zeros_like(V, dtype=np.float32)
    v0 = V[F[:,0]]; v1 = V[F[:,1]]; v2 = V[F[:,2]]
    fn = np.cross(v1 - v0, v2 - v0)
    # accumulate face normals to vertices
    for i in range(3):
        np.add.at(N, F[:, i], fn)
    lens = np.linalg.norm(N, axis=1)
    lens[lens == 0] = 1.0
    N /= lens[:, None]
    return N


def _position_attribute(geom, verts):
    vbuf = QBuffer(geom)
    vbytes, _ = _np_to_bytes(verts, np.float32)
    vbuf.setData(vbytes)

    attr = QAttribute(geom)
    attr.setName(QAttribute.defaultPositionAttributeName())
    attr.setBuffer(vbuf)
    attr.setVertexBaseType(QAttribute.VertexBaseType.Float)
    attr.setVertexSize(3)
    attr.setByteOffset(0)
    attr.setByteStride(12)  # 3 * 4 bytes
    attr.setCount(len(verts))
    return attr


def _flat_material(root, color):
    mat = QPhongMaterial(root)
    mat.setAmbient(QColor(color))
    mat.setDiffuse(QColor('black'))
    mat.setSpecular(QColor('black'))
    return mat


def make_points_entity(root, points, primitive, color):
    """Upload (n, 3) points and draw them with the given primitive type."""
    pts = np.asarray(points, dtype=np.float32).reshape(-1, 3)
    geom = QGeometry(root)
    geom.addAttribute(_position_attribute(geom, pts))

    r = QGeometryRenderer(root)
    r.setGeometry(geom)
    r.setPrimitiveType(primitive)

    ent = QEntity(root)
    ent.addComponent(r)
    ent.addComponent(_flat_material(root, color))
    return ent


def make_line_entity(root, points, color='#000000'):
    return make_points_entity(root, points, QGeometryRenderer.PrimitiveType.LineStrip, color)


def make_grid_entity(root, cell_size=0.1, extent=1.0):
    n_cells = int(round(2.0 * extent / cell_size))
    verts = []
    for i in range(n_cells + 1):
        pos = -extent + i * cell_size
        verts += [(pos, -extent, 0.0), (pos, extent, 0.0)]   # vertical
        verts += [(-extent, pos, 0.0), (extent, pos, 0.0)]   # horizontal
    return make_points_entity(root, verts, QGeometryRenderer.PrimitiveType.Lines, '#808080')


def make_axes_entities(root, extent=1.0):
    x_axis = make_points_entity(root, [(-extent, 0, 0), (extent, 0, 0)],
                                QGeometryRenderer.PrimitiveType.Lines, '#ff0000')
    y_axis = make_points_entity(root, [(0, -extent, 0), (0, extent, 0)],
                                QGeometryRenderer.PrimitiveType.Lines, '#0000ff')
    return x_axis, y_axis


def make_marker_entity(root, size=0.2, color='#0000ff'):
    """Triangle mesh pointing along +y; returns (entity, transform)."""
    verts = np.array([(-0.5, -0.5, 0.0), (0.5, -0.5, 0.0), (0.0, 0.5, 0.0)], dtype=np.float32) * size
    faces = np.array([(0, 1, 2)], dtype=np.uint32)
    norms = _compute_vertex_normals(verts, faces)

    geom = QGeometry(root)
    geom.addAttribute(_position_attribute(geom, verts))

    nbuf = QBuffer(geom)
    nbytes, _ = _np_to_bytes(norms, np.float32)
    nbuf.setData(nbytes)
    n_attr = QAttribute(geom)
    n_attr.setName(QAttribute.defaultNormalAttributeName())
    n_attr.setBuffer(nbuf)
    n_attr.setVertexBaseType(QAttribute.VertexBaseType.Float)
    n_attr.setVertexSize(3)
    n_attr.setByteOffset(0)
    n_attr.setByteStride(12)
    n_attr.setCount(len(norms))
    geom.addAttribute(n_attr)

    ibuf = QBuffer(geom)
    ibytes, _ = _np_to_bytes(faces.ravel(), np.uint32)
    ibuf.setData(ibytes)
    idx_attr = QAttribute(geom)
    idx_attr.setAttributeType(QAttribute.AttributeType.IndexAttribute)
    idx_attr.setBuffer(ibuf)
    idx_attr.setVertexBaseType(QAttribute.VertexBaseType.UnsignedInt)
    idx_attr.setCount(faces.size)
    geom.addAttribute(idx_attr)

    mesh = QGeometryRenderer(root)
    mesh.setGeometry(geom)
    mesh.setPrimitiveType(QGeometryRenderer.PrimitiveType.Triangles)

    xform = QTransform()
    ent = QEntity(root)
    ent.addComponent(mesh)
    ent.addComponent(_flat_material(root, color))
    ent.addComponent(xform)
    return ent, xform


def load_scene(root, idx):
    make_grid_entity(root)
    make_axes_entities(root)
    for name, curve in idx['by_name'].items():
        if len(curve['curve_points']) == 0:
            continue
        make_line_entity(root, curve['curve_points'], CURVE_COLORS.get(curve['mode'], '#000000'))
    cps = idx['scene']['control_points']
    if len(cps):
        make_points_entity(root, cps, QGeometryRenderer.PrimitiveType.Points, '#000000')


def main(idx, follow='catmull-rom', fps=60.0):
    app = QApplication.instance() or QApplication(sys.argv)

    view = Qt3DWindow()
    view.defaultFrameGraph().setClearColor(QColor('#ffffff'))

    root = QEntity()

    # Camera: orthographic, looking down -z at the xy plane
    cam = view.camera()
    cam.lens().setOrthographicProjection(-1.1, 1.1, -1.1, 1.1, 0.1, 100.0)
    cam.setPosition(QVector3D(0.0, 0.0, 3.0))
    cam.setViewCenter(QVector3D(0.0, 0.0, 0.0))
    cam.setUpVector(QVector3D(0.0, 1.0, 0.0))

    load_scene(root, idx)

    curve = q.get_curve(idx, follow)
    if curve is None:
        raise KeyError("No such curve: " + follow)
    mover = Mover(curve['curve_points'], fps=fps)
    _, xform = make_marker_entity(root)

    def tick():
        pos, angle = mover.step()
        xform.setTranslation(QVector3D(float(pos[0]), float(pos[1]), float(pos[2])))
        xform.setRotationZ(math.degrees(angle))

    # poll faster than fps; the mover's gate decides when to advance
    timer = QTimer()
    timer.timeout.connect(tick)
    timer.start(max(1, int(500.0 / fps)))
    tick()

    view.setRootEntity(root)
    view.resize(600, 600)
    view.show()
    return app.exec()


if __name__ == "__main__":
    source = sys.argv[1] if len(sys.argv) > 1 else 'heart'
    idx = index.build_index(sc.build_scene(cp.get_control_points(source)))
    sys.exit(main(idx))

# visionkit

A small collection of classic computer-vision and geometry helpers built
on NumPy. Images are plain NumPy arrays.

## What is inside

| Module | Purpose |
| --- | --- |
| `visionkit.disjoint_set` | `DisjointSetForest`, `Edge` and `segment_graph`: union-find and graph clustering over weighted edges |
| `visionkit.segmentation` | `GraphSegmenter` for efficient graph-based image segmentation, plus `gaussian_blur` and `pixel_edges` |
| `visionkit.symmetry` | `FastSymmetryDetector`: Hough voting over pairs of edge pixels to find lines of mirror symmetry |
| `visionkit.arcball` | `Arcball` turns mouse drags into rotation matrices; `rotation_matrix` builds an axis-angle rotation |
| `visionkit.mesh` | `Mesh` data with `cube` and `plane` builders and `compute_tangent_basis` |
| `visionkit.surfaces` | `sphere` and `torus` mesh builders |
| `visionkit.markers` | `Marker`, `is_convex`, `check_points`, `marker_code` and `rotate_marker` for square fiducial markers |
| `visionkit.projection` | `projection_matrix`, `pose_matrix`, `cv_to_gl_matrix` and `orthographic` for placing 3D content over a camera view |

## Installation

```
pip install visionkit
```

## Examples

Segment an image into regions of similar colour:

```python
import numpy as np
from visionkit.segmentation import GraphSegmenter

image = np.zeros((40, 40, 3), dtype=np.uint8)
image[:, 20:] = (200, 50, 50)

segmenter = GraphSegmenter(sigma=0.5, threshold=1500, min_component_size=20)
count = segmenter.segment(image)
labels = segmenter.labels()          # component id for each pixel
averaged = segmenter.recolor(random_color=False)
```

`recolor(random_color=True, rng=random.Random(seed))` paints each region
with a random colour instead of its average.

Find a line of mirror symmetry in an edge image:

```python
from visionkit.symmetry import FastSymmetryDetector

detector = FastSymmetryDetector(image_size=(width, height), hough_size=(rho_bins, theta_bins))
detector.vote(edge_image, min_pair_dist=25, max_pair_dist=500)
for p0, p1 in detector.result(peaks=1):
    print(p0, p1)
accum = detector.accumulation_matrix()
```

Build mesh data for rendering:

```python
from visionkit.mesh import cube, plane
from visionkit.surfaces import sphere, torus

box = cube(0.5)
ball = sphere(1.0, 30, 15)
ring = torus(0.5, 1.0)
print(box.element_count, box.triangles().shape)
```

Read a marker's code in its canonical orientation:

```python
from visionkit.markers import marker_code, rotate_marker

codes = []
m = matrix
for _ in range(4):
    codes.append(marker_code(m))
    m = rotate_marker(m)
print(min(codes))
```

## Command-line tool

```
visionkit-segment IMAGE [--sigma 0.5] [--threshold 1500] [--min-size 20]
                  [--average OUT] [--random OUT] [--seed N]
```

It reads the image, converts it to RGB, prints the number of components
found, and writes the average-colour and random-colour results to the
files given.

## What the package does not do

- It does not label connected components, transfer colour between images,
  or calibrate cameras.
- It does not locate markers in camera frames or track them over video;
  `visionkit.markers` only checks candidate outlines and reads codes from
  an already binarised marker matrix.
- It opens no windows and renders nothing: meshes and matrices are
  returned as NumPy arrays for a renderer of your choice.

## Running the tests

```
pip install "visionkit[test]"
pytest
```
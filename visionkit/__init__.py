"""Graph segmentation, symmetry detection, marker helpers and 3D geometry on NumPy arrays."""

__version__ = "0.1.0"
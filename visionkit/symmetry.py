"""Global reflectional symmetry detection by Hough voting over edge pixel pairs."""

from __future__ import annotations

import math

import numpy as np

_FLT_MAX = float(np.finfo(np.float32).max)


def _within(value: float, bottom: float, top: float) -> bool:
    return bottom < value < top


class FastSymmetryDetector:
    """Finds lines of mirror symmetry among the edge pixels of an image.

    ``image_size`` is ``(width, height)`` of the edge images that will be
    voted on; ``hough_size`` is ``(rho_bins, theta_bins)`` of the Hough
    accumulator. The rotations cover -90 to just under 90 degrees.
    """

    def __init__(self, image_size, hough_size) -> None:
        width, height = (int(v) for v in image_size)
        rho_max, theta_max = (int(v) for v in hough_size)
        if width <= 0 or height <= 0:
            raise ValueError(f"image size must be positive, got {(width, height)}")
        if rho_max <= 0 or theta_max <= 0:
            raise ValueError(f"hough size must be positive, got {(rho_max, theta_max)}")

        self.image_size = (width, height)
        self.center = ((width - 1) * 0.5, (height - 1) * 0.5)
        self.diagonal = float(np.float32(math.hypot(width, height)))
        self.rho_divisions = int(self.diagonal)
        self.rho_max = rho_max
        self.theta_max = theta_max

        step = 180.0 / theta_max
        half_theta = theta_max * 0.5
        rotations = []
        for t in range(theta_max):
            angle = math.radians(step * (t - half_theta))
            c, s = math.cos(angle), math.sin(angle)
            rotations.append([[0.5 * c, 0.5 * s], [-s, c]])
        self._rotations = np.array(rotations, dtype=np.float32)

        self._accum = np.zeros((theta_max + 2, rho_max), dtype=np.float32)

    def _rotate_edges(self, points: np.ndarray, theta: int) -> list[np.ndarray]:
        """Rotate the points and bucket their projected positions by rho, keeping order."""
        r = self._rotations[theta]
        xs, ys = points[:, 0], points[:, 1]
        half_diag = np.float32(round(self.diagonal) * 0.5)
        fourth_rho = np.float32(self.rho_max * 0.25)

        rho = np.trunc(r[1, 0] * xs + r[1, 1] * ys + half_diag).astype(np.int64)
        values = r[0, 0] * xs + r[0, 1] * ys + fourth_rho

        valid = (rho >= 0) & (rho < self.rho_divisions)
        rows, vals = rho[valid], values[valid]
        if rows.size == 0:
            return []
        order = np.argsort(rows, kind="stable")
        rows, vals = rows[order], vals[order]
        splits = np.flatnonzero(np.diff(rows)) + 1
        return np.split(vals, splits)

    def vote(self, edges, min_pair_dist: float, max_pair_dist: float) -> None:
        """Fill the accumulator from the non-zero pixels of a 2-D edge image.

        Pairs of pixels lying on the same rotated row vote for their midpoint
        when their distance lies strictly between the given bounds.
        """
        data = np.asarray(edges)
        if data.ndim != 2:
            raise ValueError(f"expected a 2-D edge image, got shape {data.shape}")

        min_dist = min_pair_dist * 0.5
        max_dist = max_pair_dist * 0.5
        self._accum.fill(0)

        ys, xs = np.nonzero(data)
        cx, cy = self.center
        points = np.column_stack((xs - cx, ys - cy)).astype(np.float32)

        for t, accum_row in enumerate(self._accum[: self.theta_max]):
            for bucket in self._rotate_edges(points, t):
                if bucket.size <= 1:
                    continue
                values = bucket.tolist()
                for i, x0 in enumerate(values[:-1]):
                    for x1 in values[i + 1:]:
                        if not _within(abs(x1 - x0), min_dist, max_dist):
                            break
                        rho_index = int(np.float32(x0 + x1))
                        if 0 <= rho_index < self.rho_max:
                            accum_row[rho_index] += 1

    def accumulation_matrix(self, thresh: float = 0.0) -> np.ndarray:
        """Return the accumulator as ``(rho, theta)``, with cells below ``thresh`` zeroed."""
        return np.where(self._accum >= thresh, self._accum, 0).T.copy()

    @staticmethod
    def _clear(matrix: np.ndarray, x: int, y: int, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            return
        rows, cols = matrix.shape
        x0, y0 = max(x, 0), max(y, 0)
        x1, y1 = min(x + width, cols), min(y + height, rows)
        if x1 > x0 and y1 > y0:
            matrix[y0:y1, x0:x1] = 0

    def result(self, peaks: int, threshold: float = -1.0) -> list[tuple[tuple[int, int], tuple[int, int]]]:
        """Return up to ``peaks`` symmetry lines, strongest first, as point pairs."""
        lines: list[tuple[tuple[int, int], tuple[int, int]]] = []
        peaks = max(0, int(peaks))

        rho_neighbors = int(self.rho_max / 20.0)
        theta_neighbors = int(self.theta_max / 20.0)

        mask = np.ones(self._accum.shape, dtype=bool)
        mask[0] = False
        mask[-1] = False
        mask &= self._accum >= threshold

        temp = self._accum.copy()

        for _ in range(peaks):
            if not mask.any():
                break
            masked = np.where(mask, temp, -np.inf)
            theta_index, rho_index = (int(v) for v in np.unravel_index(np.argmax(masked), masked.shape))

            if not _within(rho_index, 0, self.rho_max - 1):
                break
            if not _within(theta_index, 0, self.theta_max):
                break

            lines.append(self.line(rho_index, theta_index))

            r0 = max(0, rho_index - rho_neighbors)
            r1 = min(self.rho_max - 1, rho_index + rho_neighbors)
            t0 = theta_index - theta_neighbors
            t1 = theta_index + theta_neighbors

            if t0 <= 0 or t1 >= self.theta_max + 1:
                first = second = (0, 0, 0, 0)
                if t0 <= 0:
                    first = (r0, 0, r1 - r0, t1)
                    r1 = self.rho_divisions - r1
                    second = (r1, t0 + self.theta_max - 1, r1 - r0, self.theta_max + 1)
                if t1 >= self.theta_max + 1:
                    first = (r0, t0, r1 - r0, self.theta_max + 1)
                    second = (r0, 0, r1 - r0, t1 - (self.theta_max + 1))
                self._clear(temp, *first)
                self._clear(temp, *second)
            else:
                self._clear(temp, r0, t0, r1 - r0, t1 - t0)

        return lines

    def line(self, rho_index: float, theta_index: float) -> tuple[tuple[int, int], tuple[int, int]]:
        """Convert a Hough cell to the two points where its line meets the image border."""
        width, height = self.image_size
        cx, cy = self.center
        half_rho = self.rho_max * 0.5
        half_theta = self.theta_max * 0.5

        rho = (rho_index - half_rho + 0.5) * (self.diagonal / (self.rho_max - 1.0))
        theta = (theta_index - half_theta - 1.0) * (math.pi / self.theta_max)
        cos_t, sin_t = math.cos(theta), math.sin(theta)

        x_r = cx + rho * cos_t
        y_r = cy + rho * sin_t

        def nearest(candidates: list[float]) -> float:
            return min((d for d in candidates if d > 0), default=_FLT_MAX)

        d = [_FLT_MAX] * 4
        if sin_t != 0.0:
            d[0] = x_r / sin_t
            d[1] = (x_r - width + 1) / sin_t
        if cos_t != 0.0:
            d[2] = -y_r / cos_t
            d[3] = (height - 1 - y_r) / cos_t
        min_d = nearest(d)
        p0 = (int(-min_d * sin_t + x_r), int(min_d * cos_t + y_r))

        d = [_FLT_MAX] * 4
        if sin_t != 0.0:
            d[0] = -x_r / sin_t
            d[1] = (width - x_r - 1) / sin_t
        if cos_t != 0.0:
            d[2] = y_r / cos_t
            d[3] = (1 + y_r - height) / cos_t
        min_d = nearest(d)
        p1 = (int(min_d * sin_t + x_r), int(-min_d * cos_t + y_r))

        return p0, p1
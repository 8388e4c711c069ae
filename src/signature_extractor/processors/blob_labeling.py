"""4-connected component labeling of the dilated activity grid."""

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np


@dataclass
class Blob:
    """Connected group of active cells, in grid coordinates."""

    label: int
    min_x: int
    max_x: int
    min_y: int
    max_y: int
    cell_count: int

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1


def label_blobs(cells: np.ndarray) -> Tuple[np.ndarray, List[Blob]]:
    """Partition active cells into 4-connected blobs.

    Flood fill runs on an explicit work stack; recursion would overflow on
    large pages.

    Returns:
        Tuple of the label grid (0 = inactive, labels start at 1) and the
        blobs in label order
    """
    grid_h, grid_w = cells.shape
    labels = np.zeros((grid_h, grid_w), dtype=np.int32)
    blobs: List[Blob] = []
    next_label = 1

    for y in range(grid_h):
        for x in range(grid_w):
            if not cells[y, x] or labels[y, x]:
                continue

            label = next_label
            next_label += 1
            labels[y, x] = label
            blob = Blob(label, x, x, y, y, 1)
            stack = [(x, y)]

            while stack:
                cx, cy = stack.pop()
                blob.min_x = min(blob.min_x, cx)
                blob.max_x = max(blob.max_x, cx)
                blob.min_y = min(blob.min_y, cy)
                blob.max_y = max(blob.max_y, cy)

                for nx, ny in ((cx + 1, cy), (cx - 1, cy), (cx, cy + 1), (cx, cy - 1)):
                    if 0 <= nx < grid_w and 0 <= ny < grid_h and cells[ny, nx] and not labels[ny, nx]:
                        labels[ny, nx] = label
                        blob.cell_count += 1
                        stack.append((nx, ny))

            blobs.append(blob)

    return labels, blobs

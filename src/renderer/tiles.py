# renderer/tiles.py
from typing import List, Optional
import numpy as np


class Tile:
    """
    A rectangle of the output image with its own pixel storage. A tile is
    rendered by one worker and copied into the final image once.
    """
    def __init__(self, index: int, offset_i: int, offset_j: int, width: int, height: int):
        self.index = index
        self.offset_i = offset_i  # column of the top-left pixel
        self.offset_j = offset_j  # row of the top-left pixel
        self.width = width
        self.height = height
        self.pixels: Optional[np.ndarray] = None

    def __repr__(self) -> str:
        return f"Tile(#{self.index}, offset=({self.offset_i}, {self.offset_j}), size={self.width}x{self.height})"


def split_in_tiles(full_width: int, full_height: int, tile_width: int, tile_height: int) -> List[Tile]:
    """
    Partitions the image row by row into tiles. Tiles on the right and bottom
    edges are clipped to the image.
    """
    if tile_width <= 0 or tile_height <= 0:
        raise ValueError(f"Tile size must be positive, got {tile_width}x{tile_height}")
    if full_width < 0 or full_height < 0:
        raise ValueError(f"Image size must not be negative, got {full_width}x{full_height}")

    num_tiles_i = (full_width + tile_width - 1) // tile_width
    num_tiles_j = (full_height + tile_height - 1) // tile_height
    tiles = []
    for tj in range(num_tiles_j):
        for ti in range(num_tiles_i):
            offset_i = ti * tile_width
            offset_j = tj * tile_height
            width = min(tile_width, full_width - offset_i)
            height = min(tile_height, full_height - offset_j)
            tiles.append(Tile(len(tiles), offset_i, offset_j, width, height))
    return tiles

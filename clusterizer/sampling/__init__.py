from .sampler import grid_shape, sample_pixels, to_pixel_array
from .recomposer import recompose_pixels

__all__ = ["grid_shape", "sample_pixels", "to_pixel_array", "recompose_pixels"]

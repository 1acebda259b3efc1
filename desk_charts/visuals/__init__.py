from .raster import SceneRasterizer, to_mpl_path

__all__ = ["SceneRasterizer", "to_mpl_path"]

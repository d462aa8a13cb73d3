from .fill_level import predict_fill_level, predict_fill_levels

__all__ = ["predict_fill_level", "predict_fill_levels"]

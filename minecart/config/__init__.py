from .export import ExportSettings

__all__ = ["ExportSettings"]

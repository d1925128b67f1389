from .catalog_hierarchy import CatalogHierarchyUseCase

__all__ = ["CatalogHierarchyUseCase"]

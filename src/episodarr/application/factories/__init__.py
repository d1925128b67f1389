from .catalog_fields import CatalogFieldsFactory

__all__ = ["CatalogFieldsFactory"]


class HtanCatalogError (Exception):
    """Super-class for all htan-catalog errors."""
    pass

class InvalidDataset (HtanCatalogError):
    """The raw Synapse dataset does not have the expected structure."""
    pass

class SchemaError (InvalidDataset):
    """A Synapse schema fails to compile into a record decoder."""
    pass

class MetadataError (InvalidDataset):
    """The external atlas metadata does not have the expected structure."""
    pass

class UnknownSchema (HtanCatalogError):
    """A record group names a schema not known by the schema registry."""
    pass

class LoadError (HtanCatalogError):
    """A data source could not be retrieved or parsed."""
    pass

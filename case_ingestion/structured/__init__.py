from case_ingestion.structured.field_extractor import StructuredFieldExtractor
from case_ingestion.structured.models import StructuredFields

__all__ = ["StructuredFieldExtractor", "StructuredFields"]

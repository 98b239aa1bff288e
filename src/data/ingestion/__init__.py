"""Season ingestion workflow."""

from .materializer import DatasetMaterializer
from .season_pipeline import SeasonIngestionConfig, SeasonIngestionPipeline
from .validators import validate_season_payload

__all__ = [
    "DatasetMaterializer",
    "SeasonIngestionConfig",
    "SeasonIngestionPipeline",
    "validate_season_payload",
]

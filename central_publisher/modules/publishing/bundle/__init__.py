from .aggregator import aggregate, plan_aggregation, staged_name
from .archive import build_archive
from .hashing import compute_directory_hashes, normalize_algorithms, verify_directory_hashes

__all__ = [
    "aggregate",
    "plan_aggregation",
    "staged_name",
    "build_archive",
    "compute_directory_hashes",
    "normalize_algorithms",
    "verify_directory_hashes",
]

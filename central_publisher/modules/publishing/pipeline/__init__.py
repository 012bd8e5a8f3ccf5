from .coordinator import PublicationConfig, PublicationPipeline, Stage
from .generation import ArtifactGenerator, BuildToolGenerator, discover_artifacts
from .signing import GpgSigner, Signer, signature_path

__all__ = [
    "PublicationConfig",
    "PublicationPipeline",
    "Stage",
    "ArtifactGenerator",
    "BuildToolGenerator",
    "discover_artifacts",
    "GpgSigner",
    "Signer",
    "signature_path",
]

from .backends import ImageBackend, PillowBackend, SipsBackend, create_backend
from .config import Settings, load_settings
from .errors import (
    BrandAssetError,
    DimensionMismatch,
    DimensionReadFailure,
    DownloadFailure,
    ExternalToolFailure,
    InvalidArguments,
    OutputWriteFailure,
    SizeExceeded,
    ToolUnavailable,
)
from .image_processing.geometry import compute_crop
from .image_processing.pipeline import AssetPipeline
from .image_processing.validator import validate_output
from .image_processing.workspace import Workspace, acquire_workspace, release_workspace, workspace
from .media.downloader import ImageDownloader
from .models import (
    LOGO,
    SOCIAL_SHARE,
    CropRectangle,
    ImageDimensions,
    PipelineResult,
    PipelineStage,
    TargetSpec,
)

__all__ = [
    "AssetPipeline",
    "BrandAssetError",
    "CropRectangle",
    "DimensionMismatch",
    "DimensionReadFailure",
    "DownloadFailure",
    "ExternalToolFailure",
    "ImageBackend",
    "ImageDimensions",
    "ImageDownloader",
    "InvalidArguments",
    "LOGO",
    "OutputWriteFailure",
    "PillowBackend",
    "PipelineResult",
    "PipelineStage",
    "SOCIAL_SHARE",
    "Settings",
    "SipsBackend",
    "SizeExceeded",
    "TargetSpec",
    "ToolUnavailable",
    "Workspace",
    "acquire_workspace",
    "compute_crop",
    "create_backend",
    "load_settings",
    "release_workspace",
    "validate_output",
    "workspace",
]

from .config import UploadConfig
from .service import FileValidationError, UploadResult, UploadService

__all__ = [
    "FileValidationError",
    "UploadConfig",
    "UploadResult",
    "UploadService",
]

from .media_upload import MediaUploadService, is_data_uri, to_data_uri

__all__ = ["MediaUploadService", "is_data_uri", "to_data_uri"]

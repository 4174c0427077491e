from __future__ import annotations


class AppError(Exception):
    def __init__(self, message: str, status_code: int = 500, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)


class NotFoundError(AppError):
    def __init__(self, message: str = "Recurso nao encontrado"):
        super().__init__(message, status_code=404, code="NOT_FOUND")


class ValidationError(AppError):
    def __init__(self, message: str):
        super().__init__(message, status_code=422, code="VALIDATION_ERROR")


class StorageError(AppError):
    def __init__(self, message: str, code: str = "STORAGE_ERROR"):
        super().__init__(message, status_code=503, code=code)


class StorageUnavailableError(StorageError):
    def __init__(self, message: str = "Banco de dados indisponivel"):
        super().__init__(message, code="STORAGE_UNAVAILABLE")


class IngestError(AppError):
    def __init__(self, message: str, code: str = "INGEST_ERROR"):
        super().__init__(message, status_code=500, code=code)


class FreshnessError(IngestError):
    def __init__(self, message: str):
        super().__init__(message, code="FRESHNESS_ERROR")


class SchemaError(IngestError):
    def __init__(self, message: str):
        super().__init__(message, code="SCHEMA_ERROR")


class CatalogError(IngestError):
    def __init__(self, message: str):
        super().__init__(message, code="CATALOG_ERROR")


class DownloadError(IngestError):
    def __init__(self, message: str, code: str = "DOWNLOAD_ERROR"):
        super().__init__(message, code=code)


class NoArchiveSourceError(DownloadError):
    def __init__(self, message: str):
        super().__init__(message, code="NO_ARCHIVE_SOURCE")


class ArchiveError(IngestError):
    def __init__(self, message: str):
        super().__init__(message, code="ARCHIVE_ERROR")

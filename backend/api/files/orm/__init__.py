from api.files.orm.file_model import PENDING_STORAGE_KEY, SHORT_ID_TYPE, FileModel

__all__ = ["FileModel", "PENDING_STORAGE_KEY", "SHORT_ID_TYPE"]
